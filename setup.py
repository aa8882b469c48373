from setuptools import setup, find_packages

setup(
    name='libcube',
    author="Max Lapan",
    author_email="max.lapan@gmail.com",
    license='GPL-v3',
    version='0.1',
    description="Rubik's cube engine and two-phase solver",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=['numpy', 'seaborn', 'matplotlib'],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.6',
    scripts=["solver.py"],
)
