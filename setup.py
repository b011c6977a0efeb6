"""Install storefront accounts service."""

from setuptools import setup, find_packages

setup(
    name='storefront-accounts',
    version='0.3.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['wsgi', 'create_user'],
    package_data={'accounts': ['config.py']},
    install_requires=[
        "flask",
        "flask-sqlalchemy",
        "sqlalchemy",
        "werkzeug",
        "pyjwt",
        "flask-wtf",
        "wtforms",
        "email-validator",
        "retry",
        "click"
    ],
    extras_require={
        'test': [
            "pytest",
            "jsonschema",
            "hypothesis"
        ]
    },
    zip_safe=False
)
