from setuptools import setup

setup(
    name='hashseq',
    version='1.0',
    description='Reversible hashid obfuscation for integer database IDs.',
    python_requires='>=3.10',
    py_modules=[
        'config',
        'core_logic',
        'database',
        'dependencies',
        'encoding',
        'identifier',
    ],
    install_requires=[
        'hashids>=1.3',
        'pydantic>=2.0',
        'pydantic-core',
        'fastapi>=0.100',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
)
