from pathlib import Path
from setuptools import find_packages, setup


def read_requirements() -> list[str]:
    req_path = Path(__file__).parent / "requirements.txt"
    if not req_path.exists():
        return []
    return [line.strip() for line in req_path.read_text(encoding="utf-8").splitlines() if line.strip() and not line.startswith("#")]


setup(
    name="policy-checker",
    version="0.1.0",
    description="Insurance policy wording checker for visa and residency insurance programs",
    packages=find_packages(include=["policy_checker", "policy_checker.*"]),
    py_modules=["check_policy"],
    install_requires=read_requirements(),
    extras_require={"test": ["pytest>=7.4", "httpx>=0.25"]},
    python_requires=">=3.10",
    include_package_data=True,
    package_data={"policy_checker": ["data/*.json"]},
)
