from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()


setup(
    name="flowlines",
    version="0.1.0",
    author="Marc Biester",
    author_email="marc.biester@gmail.com",
    description="Evenly spaced streamlines over 2D direction fields, for plotable art",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "scipy",
        "matplotlib",
        "shapely",
        "tqdm",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
)
