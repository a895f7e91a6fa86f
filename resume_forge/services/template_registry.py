"""Service for loading and looking up template rules."""

import logging
import yaml
from pathlib import Path
from typing import Dict, List, Optional
from pydantic import ValidationError
from resume_forge.config import get_settings
from resume_forge.exceptions import UnknownTemplateError
from resume_forge.models.template_rules import DEFAULT_TEMPLATE_RULES, TemplateRules

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """
    Registry of template rules.

    Holds the built-in ``standard`` rules plus every ``*.yaml`` rule file of
    the templates directory. Rules are frozen, so the registry can be shared
    across concurrent renders.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize the registry.

        Args:
            templates_dir: Directory containing YAML rule files. Defaults to the configured directory.
        """
        if templates_dir is None:
            templates_dir = get_settings().templates_dir
        self.templates_dir = Path(templates_dir)
        self._rules: Dict[str, TemplateRules] = {DEFAULT_TEMPLATE_RULES.id: DEFAULT_TEMPLATE_RULES}
        self._load_directory()

    def _load_directory(self) -> None:
        if not self.templates_dir.is_dir():
            logger.warning("Templates directory not found: %s", self.templates_dir)
            return
        for path in sorted(self.templates_dir.glob("*.yaml")):
            rules = load_template_rules(path)
            if rules.id in self._rules:
                logger.warning("Template %s from %s overrides an existing template", rules.id, path)
            self._rules[rules.id] = rules

    def get(self, template_id: str) -> TemplateRules:
        """
        Get template rules by id.

        Args:
            template_id: Template identifier

        Returns:
            TemplateRules: The frozen rules

        Raises:
            UnknownTemplateError: If no template has this id
        """
        try:
            return self._rules[template_id]
        except KeyError:
            raise UnknownTemplateError(template_id, self._rules.keys()) from None

    def ids(self) -> List[str]:
        """Registered template ids, sorted."""
        return sorted(self._rules)

    def register(self, rules: TemplateRules) -> None:
        """Add or replace template rules."""
        self._rules[rules.id] = rules


def load_template_rules(path: Path) -> TemplateRules:
    """
    Load template rules from a YAML file.

    Args:
        path: YAML file path

    Returns:
        TemplateRules: Validated rules

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the YAML or the rules are invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Template rules file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML format in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Template rules file {path} must contain a mapping")
    data.setdefault("id", path.stem)

    try:
        return TemplateRules(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid template rules in {path}. Validation error: {e}") from e


# Singleton instance
_registry: Optional[TemplateRegistry] = None


def get_template_registry(templates_dir: Optional[Path] = None) -> TemplateRegistry:
    """
    Get or create the template registry singleton.

    Args:
        templates_dir: Optional directory for YAML rule files

    Returns:
        TemplateRegistry: The registry instance
    """
    global _registry
    if _registry is None:
        _registry = TemplateRegistry(templates_dir)
    return _registry
