from pathlib import Path
import re

from setuptools import find_packages, setup


def _read_version() -> str:
    init = Path(__file__).parent / "src" / "incbuild" / "__init__.py"
    match = re.search(r"^__version__ = '([^']+)'", init.read_text(encoding="utf-8"), re.M)
    if not match:
        raise RuntimeError("__version__ not found in src/incbuild/__init__.py")
    return match.group(1)


setup(
    name="incbuild",
    version=_read_version(),
    description="Preprocesador de inclusión textual: aplana archivos de entrada expandiendo directivas #include",
    author="GAHEOS",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["incbuild = incbuild.cli:main"]},
)
