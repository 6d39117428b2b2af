from setuptools import setup, find_packages

setup(
    name="golfmatch",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"golfmatch": ["data/*.json"]},
    python_requires=">=3.10",
    install_requires=[
        'requests>=2.31.0',
        'urllib3>=2.0.0',
        'requests-cache>=1.1.0',
        'retry-requests>=2.0.0',
        'PyYAML>=6.0',
        'Flask>=2.3.0',
        'Werkzeug>=2.3.0',
        'flask-cors>=4.0.0',
        'tabulate>=0.9.0',
        'typing_extensions>=4.5.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0'
        ]
    },
    entry_points={
        'console_scripts': [
            'golfmatch=golfmatch.cli:main'
        ]
    }
)
