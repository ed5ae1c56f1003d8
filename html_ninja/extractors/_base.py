from abc import ABC, abstractmethod
from typing import Any
from ..types import TreeNode

class BaseExtractor(ABC):
    
    @abstractmethod
    def extract(self, root: TreeNode) -> Any:
        pass
