"""Service for loading legacy resume records from YAML or JSON files."""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional


class ResumeDataLoader:
    """Service to load legacy resume records from YAML files (JSON is accepted too)."""

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the resume data loader.

        Args:
            data_dir: Directory containing YAML files. Defaults to resume_forge/data/
        """
        if data_dir is None:
            # Package directory (parent of services)
            package_dir = Path(__file__).parent.parent
            data_dir = package_dir / "data"
        self.data_dir = data_dir

    def load(self, path: Path) -> Dict[str, Any]:
        """
        Load a legacy resume record.

        The record is returned as-is; canonicalization happens in the mapper.

        Args:
            path: YAML or JSON file path

        Returns:
            Dict[str, Any]: The legacy record

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not valid YAML/JSON or not a mapping
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"Resume data file not found: {path}. "
                f"Expected file at: {path.absolute()}"
            )

        with open(path, "r", encoding="utf-8") as f:
            return self.loads(f.read(), source=str(path))

    def loads(self, text: str, source: str = "<string>") -> Dict[str, Any]:
        """
        Parse a legacy resume record from YAML or JSON text.

        Args:
            text: Document text
            source: Name used in error messages

        Returns:
            Dict[str, Any]: The legacy record

        Raises:
            ValueError: If the text is not valid YAML/JSON or not a mapping
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {source}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Resume data in {source} must be a mapping, got {type(data).__name__}")
        return data

    def load_sample(self) -> Dict[str, Any]:
        """
        Load the bundled sample record.

        Returns:
            Dict[str, Any]: The sample legacy record
        """
        return self.load(self.data_dir / "sample_resume.yaml")


# Singleton instance
_data_loader: Optional[ResumeDataLoader] = None


def get_data_loader(data_dir: Optional[Path] = None) -> ResumeDataLoader:
    """
    Get or create the resume data loader singleton.

    Args:
        data_dir: Optional directory for YAML files

    Returns:
        ResumeDataLoader: The data loader instance
    """
    global _data_loader
    if _data_loader is None:
        _data_loader = ResumeDataLoader(data_dir)
    return _data_loader
