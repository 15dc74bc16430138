"""
Import configuration.

Settings come from the JSON file read by the CLI (top level or an "import"
section) and are overridden by command-line flags.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

_BOOL_SETTINGS = ('classes_as_nodes', 'only_leaf_classes_as_nodes', 'overwrite', 'force_large_file')


@dataclass
class ImportConfig:
    """Configuration for one import run."""
    classes_as_nodes: bool = False
    only_leaf_classes_as_nodes: bool = False
    overwrite: bool = False
    rdf_format: Optional[str] = None
    force_large_file: bool = False

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ImportConfig':
        """
        Create ImportConfig from a dictionary.

        Raises:
            ValueError: If the section is not an object or a setting has the wrong type.
        """
        import_config = config_dict.get('import', config_dict)
        if not isinstance(import_config, dict):
            raise ValueError(f"'import' section must be a JSON object, got {type(import_config).__name__}")

        values: Dict[str, Any] = {}
        for key in _BOOL_SETTINGS:
            value = import_config.get(key, False)
            if not isinstance(value, bool):
                raise ValueError(f"'{key}' must be true or false, got {value!r}")
            values[key] = value

        rdf_format = import_config.get('rdf_format')
        if rdf_format is not None and not isinstance(rdf_format, str):
            raise ValueError(f"'rdf_format' must be a string, got {rdf_format!r}")

        return cls(rdf_format=rdf_format, **values)

    def with_overrides(self, **overrides: Any) -> 'ImportConfig':
        """Return a copy with every non-None override applied."""
        values = asdict(self)
        values.update({key: value for key, value in overrides.items() if value is not None})
        return ImportConfig(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
