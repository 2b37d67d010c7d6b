# budget_analyzer/loaders/__init__.py
from importlib import import_module
from pathlib import Path


def get_loader(name, config):
    loader_path = config['row_loaders'][name]
    module_name, cls_name = loader_path.rsplit('.', 1)
    mod = import_module(module_name)
    return getattr(mod, cls_name)()


def loader_for_path(file_path, config):
    """Pick a loader from the file suffix (``statement.csv`` -> ``csv``)."""
    suffix = Path(file_path).suffix.lower().lstrip('.')
    if suffix not in config['row_loaders']:
        raise ValueError(
            f"Unsupported statement file '{file_path}'. "
            f"Expected one of: {', '.join(sorted(config['row_loaders']))}"
        )
    return get_loader(suffix, config)
