"""IDE backends."""

from idegen.ides.base import Ide
from idegen.ides.netbeans import NETBEANS, Netbeans
from idegen.ides.registry import get_ide, get_ides, update_projects

__all__ = [
    "Ide",
    "NETBEANS",
    "Netbeans",
    "get_ide",
    "get_ides",
    "update_projects",
]
