from setuptools import setup, find_packages

setup(
    name="rulefix",
    version="0.1.0",
    packages=find_packages(include=["rulefix", "rulefix.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        # Syntax trees for nodes/tokens and post-fix validation
        "tree-sitter>=0.22",
        "tree-sitter-python",
        "tree-sitter-javascript",
        "tree-sitter-typescript",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    author="Uday Kanth",
    description="Declarative fix descriptors for lint rules, with a reference applier.",
)
