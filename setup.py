# setup.py
from setuptools import setup, find_packages

setup(
    name="budgetsense",
    version="0.1.0",
    description="Categorize bank statement transactions and get budget recommendations",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.8",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "pandas>=1.1",
        "openpyxl>=3.0",
        "xlrd>=2.0.1",
        "xlsxwriter>=3.0",
        "anyio>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "budgetsense=budget_analyzer.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
