from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()


setup(
    name="near-linkdrop",
    packages=find_packages("src"),
    package_dir={"": "src"},
    version="0.1.0",
    description="Provision a NEAR linkdrop: initialize the proxy, mint keys, fund the drop",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.8",
    install_requires=[
        "aiohttp",
        "base58",
        "loguru",
        "pydantic>=2",
        "pydantic-settings",
        "pynacl",
        "py-near-primitives",
        "python-dotenv",
    ],
    extras_require={"test": ["pytest", "pytest-asyncio"]},
    entry_points={"console_scripts": ["near-linkdrop=near_linkdrop.__main__:main"]},
)
