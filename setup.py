from setuptools import setup, find_packages

setup(
    name="mentorslot",
    version="0.1.0",
    packages=find_packages(include=["mentorslot", "mentorslot.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<4.1",  # passlib 1.7 cannot read newer bcrypt versions
        "pydantic[email]>=2",
        "pydantic-settings",
        "python-dotenv",
        "alembic",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
