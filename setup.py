"""Build configuration for Contact Sheet.

Usage:
    pip install -e .[test]
    contact-sheet ./my-scans

Footer text is rendered with Qt's SVG module, so PySide6 is required even
though the tool has no window.
"""
from setuptools import setup

MODULES = [
    'contact_sheet',
    'compositor',
    'footer',
    'layout',
    'models',
    'generate_test_images',
]

setup(
    name='contact-sheet',
    version='1.0.0',
    description='Printable 120 x 120 mm contact sheets for film scans',
    py_modules=MODULES,
    python_requires='>=3.10',
    install_requires=[
        'Pillow>=10.1',
        'PySide6',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'contact-sheet=contact_sheet:main',
            'contact-sheet-samples=generate_test_images:main',
        ],
    },
)
