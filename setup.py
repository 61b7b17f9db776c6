# setup.py
from setuptools import setup

setup(
    name="curage",
    version="0.3.0",
    description="Lexer, parser, binder and language server for the curage toy language",
    packages=[
        "curage",
        "curage.types",
        "curage.reader",
        "curage.analysis",
        "curage_lsp",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "curage-ls=curage_lsp.__main__:main",
            "curage-check=curage.__main__:main",
        ],
    },
    zip_safe=False,
)
