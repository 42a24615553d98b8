"""Industries: the fixed catalogue companies are classified with."""
from dataclasses import dataclass

from .entity import Multiple as _Multiple


@dataclass
class Multiple(_Multiple):
    envelope = "industries"

    def url_path(self) -> str:
        return "/industries.json"
