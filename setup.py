# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="reflectaudit",
    version="0.1.0",
    description="Audit Rust/Bevy sources for types deriving Reflect and Component without #[reflect(Component)]",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["reflectaudit*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-rust>=0.23",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'reflectaudit=reflectaudit.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
