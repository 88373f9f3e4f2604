"""Configuration management for Redirstage.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from redirstage.core.prefix import DEFAULT_PREFIX
from redirstage.core.rules import DEFAULT_RULES_FILE

CONFIG_FILENAME = "redirstage.toml"
DEFAULT_WATCH_PATTERNS = ["**/*.md", DEFAULT_RULES_FILE]


def validate_output_dir(source_dir: Path, output_dir: Path) -> None:
    """Reject an output directory that is the source directory or inside it.

    Raises:
        ValueError: If output_dir equals or is nested in source_dir
    """
    if output_dir.resolve().is_relative_to(source_dir.resolve()):
        raise ValueError(
            f"docs.output_dir must be outside docs.source_dir: {output_dir} is in {source_dir}"
        )


@dataclass
class DocsConfig:
    """Documentation source and output configuration."""

    source_dir: Path = field(default_factory=lambda: Path("docs"))
    output_dir: Path = field(default_factory=lambda: Path("site"))


@dataclass(frozen=True)
class RedirectsConfig:
    """Redirect generation configuration.

    Attributes:
        meta_refresh: Generate client-side meta-refresh pages
        netlify: Generate a Netlify-style rules file
        netlify_prefix: Include escape-prefix redirects in the rules file
        prefix: Escape prefix marking segments to redirect to; empty disables
        page_extension: Extension of generated redirect pages
        rules_file: Rules file name, read from the source root and written
            to the output root
    """

    meta_refresh: bool = True
    netlify: bool = False
    netlify_prefix: bool = True
    prefix: str = DEFAULT_PREFIX
    page_extension: str = "html"
    rules_file: str = DEFAULT_RULES_FILE

    @property
    def automatic_enabled(self) -> bool:
        """Whether redirect-from metadata is collected at all."""
        return self.meta_refresh or self.netlify

    @property
    def prefix_enabled(self) -> bool:
        """Whether destinations are scanned for the escape prefix."""
        return self.netlify and self.netlify_prefix and bool(self.prefix)


@dataclass
class WatchConfig:
    """Watch mode configuration."""

    patterns: list[str] = field(default_factory=lambda: list(DEFAULT_WATCH_PATTERNS))


@dataclass
class Config:
    """Application configuration."""

    docs: DocsConfig
    redirects: RedirectsConfig
    watch: WatchConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for redirstage.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            docs=DocsConfig(),
            redirects=RedirectsConfig(),
            watch=WatchConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            docs=cls._parse_docs(data.get("docs"), config_dir),
            redirects=cls._parse_redirects(data.get("redirects")),
            watch=cls._parse_watch(data.get("watch")),
            config_path=path,
        )

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig(
                source_dir=config_dir / "docs",
                output_dir=config_dir / "site",
            )

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        source_dir = data.get("source_dir", "docs")
        if not isinstance(source_dir, str):
            raise ValueError("docs.source_dir must be a string")

        output_dir = data.get("output_dir", "site")
        if not isinstance(output_dir, str):
            raise ValueError("docs.output_dir must be a string")

        validate_output_dir(config_dir / source_dir, config_dir / output_dir)
        return DocsConfig(
            source_dir=config_dir / source_dir,
            output_dir=config_dir / output_dir,
        )

    @classmethod
    def _parse_redirects(cls, data: object) -> RedirectsConfig:
        """Parse redirects configuration section.

        Args:
            data: Raw redirects section data

        Returns:
            RedirectsConfig instance
        """
        if data is None:
            return RedirectsConfig()

        if not isinstance(data, dict):
            raise ValueError("redirects section must be a dictionary")

        values: dict[str, bool | str] = {}
        for key in ("meta_refresh", "netlify", "netlify_prefix"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ValueError(f"redirects.{key} must be a boolean")
                values[key] = data[key]

        for key in ("prefix", "page_extension"):
            if key in data:
                if not isinstance(data[key], str):
                    raise ValueError(f"redirects.{key} must be a string")
                values[key] = data[key]

        if "rules_file" in data:
            rules_file = data["rules_file"]
            if not isinstance(rules_file, str) or not rules_file:
                raise ValueError("redirects.rules_file must be a non-empty string")
            values["rules_file"] = rules_file

        return RedirectsConfig(**values)  # type: ignore[arg-type]

    @classmethod
    def _parse_watch(cls, data: object) -> WatchConfig:
        """Parse watch configuration section.

        Args:
            data: Raw watch section data

        Returns:
            WatchConfig instance
        """
        if data is None:
            return WatchConfig()

        if not isinstance(data, dict):
            raise ValueError("watch section must be a dictionary")

        patterns_raw = data.get("patterns")
        if patterns_raw is None:
            return WatchConfig()
        if not isinstance(patterns_raw, list):
            raise ValueError("watch.patterns must be a list")
        patterns: list[str] = []
        for item in patterns_raw:
            if not isinstance(item, str):
                raise ValueError("watch.patterns items must be strings")
            patterns.append(item)

        return WatchConfig(patterns=patterns)

    def with_overrides(
        self,
        *,
        source_dir: Path | None = None,
        output_dir: Path | None = None,
        meta_refresh: bool | None = None,
        netlify: bool | None = None,
        netlify_prefix: bool | None = None,
        prefix: str | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. This follows
        the immutable pattern - the original Config is not modified.

        Args:
            source_dir: Override docs.source_dir
            output_dir: Override docs.output_dir
            meta_refresh: Override redirects.meta_refresh
            netlify: Override redirects.netlify
            netlify_prefix: Override redirects.netlify_prefix
            prefix: Override redirects.prefix

        Returns:
            New Config instance with overrides applied

        Raises:
            ValueError: If the resulting output directory is inside the source
        """
        docs = self.docs
        if source_dir is not None or output_dir is not None:
            docs = replace(
                self.docs,
                source_dir=source_dir if source_dir is not None else self.docs.source_dir,
                output_dir=output_dir if output_dir is not None else self.docs.output_dir,
            )
            validate_output_dir(docs.source_dir, docs.output_dir)

        overrides = {
            "meta_refresh": meta_refresh,
            "netlify": netlify,
            "netlify_prefix": netlify_prefix,
            "prefix": prefix,
        }
        redirects = replace(
            self.redirects,
            **{key: value for key, value in overrides.items() if value is not None},
        )

        return replace(self, docs=docs, redirects=redirects)
