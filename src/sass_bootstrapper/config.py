"""Project-scoped options stored in .sass-bootstrapper.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from sass_bootstrapper.errors import ConfigurationError
from sass_bootstrapper.parser import ensure_distinct_keywords

CONFIG_FILENAME = ".sass-bootstrapper.yaml"
IMPORT_KEYWORD = "@import"
DEFAULT_REQUIRE_KEYWORD = "#requires"
DEFAULT_BOOTSTRAP_FILE = "app/styles/bootstrap.sass"
DEFAULT_ROOT_PATHS = ("app/styles/", "bower_components/")
DEFAULT_SRC = ("app/styles/**/*.scss", "app/styles/**/*.sass")

# Option names as written by users of the original task-runner plugin.
_LEGACY_KEYS = {
    "filterRootPaths": "filter_root_paths",
    "bootstrapFile": "bootstrap_file",
    "importKeyword": "import_keyword",
    "requireKeyword": "require_keyword",
    "useRelativePaths": "use_relative_paths",
}


def _str_list(value: object, *, name: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if str(item).strip()]
    raise ConfigurationError(f"'{name}' must be a string or a list of strings")


@dataclass(slots=True)
class BootstrapOptions:
    """Options controlling a bootstrap run."""

    src: list[str] = field(default_factory=lambda: list(DEFAULT_SRC))
    exclude: list[str] = field(default_factory=list)
    filter_root_paths: list[str] = field(default_factory=lambda: list(DEFAULT_ROOT_PATHS))
    bootstrap_file: str = DEFAULT_BOOTSTRAP_FILE
    require_keyword: str = DEFAULT_REQUIRE_KEYWORD
    use_relative_paths: bool = False

    @property
    def import_keyword(self) -> str:
        return IMPORT_KEYWORD

    @property
    def statement_terminator(self) -> str:
        """``.sass`` output is indentation based and takes no semicolons."""
        return "" if self.bootstrap_file.endswith(".sass") else ";"

    def validate(self) -> None:
        """Raise ConfigurationError for options that cannot produce a run."""
        if not self.require_keyword.strip():
            raise ConfigurationError("'require_keyword' must not be empty")
        if not self.bootstrap_file.strip():
            raise ConfigurationError("'bootstrap_file' must not be empty")
        ensure_distinct_keywords(self.import_keyword, self.require_keyword)

    def with_overrides(self, **overrides: Any) -> "BootstrapOptions":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)

    def to_dict(self) -> dict[str, object]:
        return {
            "src": list(self.src),
            "exclude": list(self.exclude),
            "filter_root_paths": list(self.filter_root_paths),
            "bootstrap_file": self.bootstrap_file,
            "require_keyword": self.require_keyword,
            "use_relative_paths": self.use_relative_paths,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "BootstrapOptions":
        if not isinstance(data, dict):
            return cls()

        values = {_LEGACY_KEYS.get(str(key), str(key)): value for key, value in data.items()}

        import_keyword = values.pop("import_keyword", IMPORT_KEYWORD)
        if import_keyword != IMPORT_KEYWORD:
            raise ConfigurationError(
                f"The import keyword is fixed to '{IMPORT_KEYWORD}'; got '{import_keyword}'"
            )

        options = cls()
        for name in ("src", "exclude", "filter_root_paths"):
            if name in values and values[name] is not None:
                setattr(options, name, _str_list(values[name], name=name))
        for name in ("bootstrap_file", "require_keyword"):
            value = values.get(name)
            if isinstance(value, str) and value.strip():
                setattr(options, name, value.strip())
        relative = values.get("use_relative_paths")
        if isinstance(relative, bool):
            options.use_relative_paths = relative
        elif relative is not None:
            raise ConfigurationError("'use_relative_paths' must be true or false")

        unknown = set(values) - set(options.to_dict())
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return options


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_FILENAME


def load_options(project_root: Path, path: Path | None = None) -> BootstrapOptions:
    """Load options from the project's YAML file, or defaults when absent."""
    path = path or config_path(project_root)
    if not path.exists():
        return BootstrapOptions()

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"{path} must contain a mapping of options")
    return BootstrapOptions.from_dict(payload)


def save_options(project_root: Path, options: BootstrapOptions) -> Path:
    """Write options to the project's YAML file."""
    path = config_path(project_root)
    yaml = YAML()
    yaml.default_flow_style = False
    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(options.to_dict(), handle)
    return path
