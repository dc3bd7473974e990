from setuptools import setup, find_packages
from pathlib import Path

# Read the requirements from requirements.txt
reqs_path = Path(__file__).parent / "requirements.txt"
requirements = [
    line.strip()
    for line in reqs_path.read_text().splitlines()
    if line.strip() and not line.startswith("#")
]

setup(
    name="repo-lint",
    version="0.1.0",
    description="Repository hygiene checks: copyright headers, imports, peer constraints and golangci-lint",
    packages=find_packages(),
    package_data={"repolint": ["templates/*.j2"]},
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={"tests": ["pytest"]},
    entry_points={"console_scripts": ["repolint = repolint.cli:run"]},
)
