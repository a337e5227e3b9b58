from setuptools import setup, find_packages

setup(
    name="resource-manifests",
    version="0.1.0",
    description="Render YAML deployment manifests from resource templates.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"resource_manifests.templates": ["*.yaml.template"]},
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
        "rich",
        "typer",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "resource-manifests=resource_manifests.cli:main",
        ],
    },
)
