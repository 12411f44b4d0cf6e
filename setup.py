from setuptools import setup, find_packages

setup(
    name="aho_corasick_package",
    version="0.1.0",
    packages=find_packages(where='.', include=['aho_corasick_package', 'aho_corasick_package.*']),
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.19.0'
    ],
    extras_require={
        'test': ['pytest'],
        'graphviz': ['graphviz'],
        'benchmark': ['pandas', 'matplotlib'],
    },
    zip_safe=True
)
