# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="reposnap",
    version="0.3.0",
    description="Snapshot a directory tree as text, a JSON manifest or an AI-ready summary",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["reposnap", "reposnap.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pathspec>=0.12",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'reposnap=reposnap.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
