# setup.py
from setuptools import setup
import os

# Read the version from the package without importing it (pygls may be absent at build time)
init_path = os.path.join("luatool_lsp", "__init__.py")
with open(init_path, encoding="utf-8") as f:
    version = next(line.split('"')[1] for line in f if line.startswith("__version__"))

setup(
    name="luatool-lsp",
    version=version,
    description="Language Server bridges for the selene linter and the stylua formatter",
    packages=["luatool_lsp"],
    python_requires=">=3.8",
    install_requires=[
        "pygls>=1.3,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "luatool-lsp=luatool_lsp.__main__:main",
        ],
    },
    zip_safe=False,
)
