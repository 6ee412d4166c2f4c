"""
/setup.py

LaTeX escaping helpers and a fixture-driven rendering test harness.
"""

import setuptools

with open("requirements.txt", "r", encoding="utf-8") as file:
    requirements = file.read().splitlines()

setuptools.setup(
    name="latexize",
    version="0.1.0",
    description="LaTeX text escaping and renderer test helpers",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "latexize = latexize.cli:main",
        ]
    },
)
