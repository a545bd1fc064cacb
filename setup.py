import os
from setuptools import setup, find_packages

def parse_requirements(requirements):
    with open(requirements) as f:
        return [l.strip('\n') for l in f if l.strip('\n') and not l.startswith('#')]

requirements = parse_requirements(os.path.join(os.path.dirname(os.path.abspath(__file__)), "requirements.txt"))

setup(
    name='leads_backend',
    version='0.1.0',
    install_requires=requirements,
    extras_require={
        "test": ["pytest", "httpx"],
    },
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["leads_backend", "leads_backend.*"]),
    package_data={
        "leads_backend": [
            "data/*.yaml",
            "alembic.ini",
            "alembic/*.py",
            "alembic/*.mako",
            "alembic/versions/*.py",
        ],
    },
    entry_points={
        "console_scripts": [
            "leads=leads_backend.cli.cli:cli",
        ],
    }
)
