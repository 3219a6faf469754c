from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()



setup(
    name="chargefield",
    version="0.0.1",
    description="Field lines and equipotential bands of fixed point charges",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["chargefield", "chargefield.*"]),
    install_requires=[
        "numpy",
        "matplotlib",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "gui_scripts": ["chargefield-gui=chargefield.fieldlines.fieldline_gui:main"],
    },
    python_requires=">=3.8",
)
