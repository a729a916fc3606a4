from setuptools import setup, find_packages

with open("README.md", "r") as file:
    README = file.read()

setup(
    name='tristate',
    version='0.1.0',
    description="Optional values that tell an explicit null from an absent value",
    long_description=README,
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'orjson>=3.4',
        'PyYAML>=5.3',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
)
