"""Top-level package for the Question Paper Toolkit.

Provides subpackages:
- paper_toolkit.core – immutable data models, validation and serialization
- paper_toolkit.assembler – sampling, section editing and paper assembly
- paper_toolkit.storage – draft cache and local paper store
- paper_toolkit.review – single attempt review helpers
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.1"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("paper_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
