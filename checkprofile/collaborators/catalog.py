# Catalog adapter: reads an exported analyzer catalog (version + problem list) from JSON.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from packaging.version import InvalidVersion
from pydantic import BaseModel, Field, ValidationError

from checkprofile.collaborators.base import CatalogLoader, VersionChecker
from checkprofile.errors import CatalogIOError, ConfigurationParseError, ContentParseError
from checkprofile.problems.models import Problem
from checkprofile.version import Version

logger = logging.getLogger(__name__)


class CatalogDocument(BaseModel):
    """On-disk layout: {"version": "Cppcheck 1.44", "problems": [{id, category, ...}]}."""

    version: str
    problems: List[Problem] = Field(default_factory=list)


class JsonCatalogLoader(VersionChecker, CatalogLoader):
    """
    Version checker and catalog loader over one JSON catalog file.

    The binary path passed by the profile only identifies which analyzer the
    catalog belongs to; the document at self.path is always the source. The
    file is re-read on every call so a replaced catalog is picked up on reload.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> CatalogDocument:
        if self.path.is_dir():
            raise ConfigurationParseError(f"Catalog path is a directory: {self.path}")
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogIOError(f"Failed to read catalog {self.path}: {e}") from e
        try:
            return CatalogDocument.model_validate(json.loads(text))
        except json.JSONDecodeError as e:
            raise ContentParseError(f"Catalog {self.path} is not valid JSON: {e}") from e
        except ValidationError as e:
            raise ContentParseError(f"Catalog {self.path} has an invalid layout: {e}") from e

    def check_version(self, binary_path: str) -> Version:
        document = self._read()
        try:
            version = Version.parse(document.version)
        except InvalidVersion as e:
            raise ContentParseError(f"Catalog {self.path} has an invalid version: {e}") from e
        logger.info("Analyzer %s reports version %s", binary_path, version)
        return version

    def load_catalog(self, binary_path: str) -> list[Problem]:
        problems = self._read().problems
        logger.info("Loaded %d problems for %s from %s", len(problems), binary_path, self.path)
        return problems
