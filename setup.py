from glob import glob
from setuptools import setup, find_packages


setup(
    name='scicalc',
    version='0.1.0',
    description='Scientific expression calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    python_requires='>=3.11',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'bandit',
            'mypy',
            'safety',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
