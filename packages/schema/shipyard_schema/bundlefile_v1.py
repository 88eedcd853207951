"""
Shipyard Bundlefile Schema v1.0

This module defines Pydantic models for validating Bundlefile configurations
and the resolution policy handed to the dependency resolver.

Design Principles:
- Pure validation: Receives dicts, validates structure, returns typed objects
- No file I/O: File reading is the SDK's responsibility
- Explicit policy: exclusion/forbidden lists are values, never globals

Usage:
    from shipyard_schema import BundleSpec

    data = yaml.safe_load(content)
    spec = BundleSpec.model_validate(data)
    policy = spec.policy
"""

from typing import FrozenSet, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shipyard_common import (
    DEFAULT_EXCLUDED_PACKAGES,
    DEFAULT_FORBIDDEN_PACKAGES,
    LOG_LEVELS,
    SUPPORTED_BUNDLEFILE_VERSIONS,
    BundleDefaults,
    PackageManagerDefaults,
    ValidationError,
)

# =============================================================================
# RESOLUTION POLICY
# =============================================================================


class ResolutionPolicy(BaseModel):
    """
    Exclusion and forbidden-package policy for one resolution call.

    - excluded_packages: dropped from the closure together with any subtree
      reachable only through them. Not an error.
    - forbidden_packages: any non-excluded reachable match aborts resolution.

    Example:
        ```yaml
        policy:
          excluded_packages: [react, react-dom]
          forbidden_packages: [webpack]
        ```
    """

    excluded_packages: FrozenSet[str] = frozenset()
    forbidden_packages: FrozenSet[str] = frozenset()

    model_config = ConfigDict(frozen=True)

    @field_validator("excluded_packages", "forbidden_packages")
    @classmethod
    def validate_package_names(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        """Validate that package names are non-empty strings."""
        for name in v:
            if not name or not name.strip():
                raise ValidationError("Policy package names cannot be empty strings")
        return v

    def is_excluded(self, name: str) -> bool:
        return name in self.excluded_packages

    def is_forbidden(self, name: str) -> bool:
        return name in self.forbidden_packages

    @classmethod
    def defaults(cls) -> "ResolutionPolicy":
        """Policy preloaded with the stock excluded and forbidden lists."""
        return cls(
            excluded_packages=frozenset(DEFAULT_EXCLUDED_PACKAGES),
            forbidden_packages=frozenset(DEFAULT_FORBIDDEN_PACKAGES),
        )


# =============================================================================
# BUNDLEFILE SECTIONS
# =============================================================================


class PackageManagerConfig(BaseModel):
    """
    How to invoke the external package manager.

    Example:
        ```yaml
        package_manager:
          binary: yarn
          timeout_seconds: 300
        ```
    """

    binary: str = PackageManagerDefaults.BINARY
    timeout_seconds: float = PackageManagerDefaults.TIMEOUT_SECONDS
    max_output_bytes: int = PackageManagerDefaults.MAX_OUTPUT_BYTES

    model_config = ConfigDict(extra="allow")

    @field_validator("binary")
    @classmethod
    def validate_binary(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("package_manager.binary cannot be empty")
        return v.strip()

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValidationError(f"package_manager.timeout_seconds must be positive, got {v}")
        return v

    @field_validator("max_output_bytes")
    @classmethod
    def validate_max_output(cls, v: int) -> int:
        if v <= 0:
            raise ValidationError(f"package_manager.max_output_bytes must be positive, got {v}")
        return v


class BundleConfig(BaseModel):
    """
    What to bundle and where it lives.

    Example:
        ```yaml
        bundle:
          root_module: "@eclipse-che/theia-assembly"
          root_dir: "."
          dependencies_dir: examples/assembly
          assembly_dir: examples/assembly
          include:
            - "lib/**"
            - "src-gen/**"
            - package.json
        ```
    """

    root_module: str
    """Module whose production closure is bundled (not itself included)"""

    root_dir: str = "."
    """Project root; module store falls back to <root_dir>/node_modules"""

    dependencies_dir: str = BundleDefaults.ASSEMBLY_DIR
    """Working directory for the package-manager commands"""

    assembly_dir: str = BundleDefaults.ASSEMBLY_DIR
    """Directory whose generated output is added to the bundle"""

    target_dir: str = BundleDefaults.TARGET_DIR
    """Where the downstream copy step writes the bundle"""

    include: List[str] = Field(default_factory=lambda: list(BundleDefaults.INCLUDE))
    """Glob patterns, relative to assembly_dir, added to the bundle"""

    model_config = ConfigDict(extra="allow")

    @field_validator("root_module")
    @classmethod
    def validate_root_module(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValidationError("bundle.root_module cannot be empty")
        if "@" in v[1:]:
            raise ValidationError(
                f"bundle.root_module must be a bare module name without a version: '{v}'"
            )
        return v

    @field_validator("include")
    @classmethod
    def validate_include(cls, v: List[str]) -> List[str]:
        for pattern in v:
            if not pattern or not pattern.strip():
                raise ValidationError("Bundle include patterns cannot be empty strings")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: '{v}'. Supported levels: {', '.join(LOG_LEVELS)}"
            )
        return level


# =============================================================================
# ROOT BUNDLESPEC MODEL
# =============================================================================


class BundleSpec(BaseModel):
    """
    Root model for Bundlefile v1.0.

    When the policy section is omitted the stock excluded/forbidden lists
    apply; an explicit policy section replaces them entirely.

    Usage:
        data = yaml.safe_load(file_content)
        spec = BundleSpec.model_validate(data)
        spec.bundle.root_module
    """

    version: Literal["1.0"]
    bundle: BundleConfig
    package_manager: PackageManagerConfig = Field(default_factory=PackageManagerConfig)
    policy: ResolutionPolicy = Field(default_factory=ResolutionPolicy.defaults)
    logging: Optional[LoggingConfig] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("version", mode="before")
    @classmethod
    def validate_version_supported(cls, v: object) -> object:
        """Validate Bundlefile version is supported"""
        if str(v) not in SUPPORTED_BUNDLEFILE_VERSIONS:
            raise ValidationError(
                f"Unsupported Bundlefile version: '{v}'. "
                f"Supported versions: {', '.join(SUPPORTED_BUNDLEFILE_VERSIONS)}"
            )
        return str(v)
