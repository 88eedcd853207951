"""
Shipyard Constants

Single source of truth for defaults shared across packages.
"""

SUPPORTED_BUNDLEFILE_VERSIONS = ["1.0"]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingDefaults:
    """Defaults for the structured logger."""

    LEVEL = "INFO"
    ENV_VAR = "SHIPYARD_LOG_LEVEL"


class PackageManagerDefaults:
    """Defaults for talking to the external package manager."""

    BINARY = "yarn"
    LIST_PRODUCTION_ARGS = "list --json --prod"
    CURRENT_CONFIG_ARGS = "config current --json"
    MODULES_DIRECTORY = "node_modules"
    TIMEOUT_SECONDS = 300
    MAX_OUTPUT_BYTES = 1024 * 1024


class BundleDefaults:
    """Defaults for the production bundle layout."""

    ASSEMBLY_DIR = "examples/assembly"
    TARGET_DIR = "production"
    INCLUDE = ["lib/**", "src-gen/**", "package.json"]


# Packages that pull in large build toolchains; their presence fails the build
DEFAULT_FORBIDDEN_PACKAGES = [
    "webpack",
    "webpack-cli",
    "@theia/application-manager",
]

# Client-side packages already bundled by webpack
DEFAULT_EXCLUDED_PACKAGES = [
    "electron",
    "react",
    "react-virtualized",
    "onigasm",
    "oniguruma",
    "@theia/monaco",
    "monaco-css",
    "react-dom",
    "font-awesome",
    "monaco-html",
    "@typefox/monaco-editor-core",
]
