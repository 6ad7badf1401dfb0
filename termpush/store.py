#!/usr/bin/env python3
"""
Project, locale and term storage.

TermStore is the read interface the collector and authorizer depend on.
CatalogStore implements it over an in-memory catalog that can be loaded
from a JSON or YAML file:

    projects:
      demo:
        members: {alice: admin}
        locales: [en, fr]
        terms:
          greeting: {en: Hello, fr: Bonjour}
          farewell: {en: Goodbye}
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ValidationError


@dataclass(frozen=True)
class ProjectLocale:
    """A locale configured for a project."""
    id: str
    project_id: str
    code: str


@dataclass
class TermRow:
    """
    A project term left-joined with its translation rows for one locale.

    Attributes:
        value: The term
        translations: Translation values stored for the locale; normally
            zero or one, more than one is a data-integrity problem
    """
    value: str
    translations: list[str] = field(default_factory=list)


class TermStore(ABC):
    """Read access to projects, their locales, members and terms."""

    @abstractmethod
    def project_exists(self, project_id: str) -> bool:
        pass

    @abstractmethod
    def project_locales(self, project_id: str) -> list[ProjectLocale]:
        """Locales configured for the project, in configuration order."""
        pass

    def find_project_locale(self, project_id: str, code: str) -> Optional[ProjectLocale]:
        for project_locale in self.project_locales(project_id):
            if project_locale.code == code:
                return project_locale
        return None

    @abstractmethod
    def terms_with_translations(
        self,
        project_id: str,
        project_locale: ProjectLocale,
    ) -> list[TermRow]:
        """
        All terms of the project with their translations for one locale.

        Args:
            project_id: Project identifier
            project_locale: Locale whose translations are joined

        Returns:
            One row per term, ordered by term value ascending
        """
        pass

    @abstractmethod
    def project_members(self, project_id: str) -> dict[str, str]:
        """Map of caller -> role for the project."""
        pass


class CatalogStore(TermStore):
    """TermStore backed by a catalog mapping (see module docstring)."""

    def __init__(self, catalog: dict[str, Any]):
        self._projects = self._validate(catalog)

    @classmethod
    def load(cls, path: str) -> "CatalogStore":
        """
        Load a catalog from a .json, .yml or .yaml file.

        Raises:
            ValidationError: If the file cannot be read or parsed
        """
        catalog_path = Path(path)
        try:
            content = catalog_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Cannot read catalog {path}: {e}", field="catalog")

        try:
            if catalog_path.suffix.lower() == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValidationError(f"Invalid catalog {path}: {e}", field="catalog")

        return cls(data or {})

    def _validate(self, catalog: Any) -> dict[str, dict]:
        if not isinstance(catalog, dict) or not isinstance(catalog.get("projects", {}), dict):
            raise ValidationError("Catalog must be a mapping with a 'projects' mapping", field="catalog")

        projects = {}
        for project_id, project in (catalog.get("projects") or {}).items():
            project = project or {}
            locales = project.get("locales") or []
            terms = project.get("terms") or {}
            members = project.get("members") or {}
            if not isinstance(locales, list) or not isinstance(terms, dict) or not isinstance(members, dict):
                raise ValidationError(
                    f"Project {project_id}: 'locales' must be a list, 'terms' and 'members' mappings",
                    field="catalog",
                )
            for term, values in terms.items():
                if values is not None and not isinstance(values, dict):
                    raise ValidationError(
                        f"Project {project_id}: term {term!r} must map locales to translations",
                        field="catalog",
                    )
            projects[str(project_id)] = {
                "locales": [str(code) for code in locales],
                "terms": {str(term): values or {} for term, values in terms.items()},
                "members": {str(caller): str(role) for caller, role in members.items()},
            }
        return projects

    def project_exists(self, project_id: str) -> bool:
        return project_id in self._projects

    def project_locales(self, project_id: str) -> list[ProjectLocale]:
        project = self._projects.get(project_id)
        if project is None:
            return []
        return [
            ProjectLocale(id=f"{project_id}:{code}", project_id=project_id, code=code)
            for code in project["locales"]
        ]

    def terms_with_translations(
        self,
        project_id: str,
        project_locale: ProjectLocale,
    ) -> list[TermRow]:
        project = self._projects.get(project_id)
        if project is None:
            return []

        rows = []
        for term in sorted(project["terms"]):
            value = project["terms"][term].get(project_locale.code)
            if value is None:
                translations = []
            elif isinstance(value, list):
                translations = ["" if v is None else str(v) for v in value]
            else:
                translations = [str(value)]
            rows.append(TermRow(value=term, translations=translations))
        return rows

    def project_members(self, project_id: str) -> dict[str, str]:
        project = self._projects.get(project_id)
        return dict(project["members"]) if project else {}
