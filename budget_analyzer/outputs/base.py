# budget_analyzer/outputs/base.py
from abc import ABC, abstractmethod

class BaseOutput(ABC):
    @abstractmethod
    def write(self, result):
        """Write an AnalysisResult to the chosen sink; returns the path written or None."""
        pass
