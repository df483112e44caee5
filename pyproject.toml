[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rideshare"
version = "0.1.0"
description = "Ride-hailing backend services: accounts, rides and payments over HTTP"
requires-python = ">=3.10"
keywords = ["ride-hailing", "microservices", "flask", "rabbitmq", "postgresql", "http"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: Flask",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "bcrypt",
    "flask",
    "sqlalchemy",
    "pika",
    "requests",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
rideshare-account = "rideshare.account.http:main"
rideshare-payment = "rideshare.payment.http:main"
rideshare-ride = "rideshare.ride.http:main"

[tool.hatch.build.targets.wheel]
packages = ["rideshare"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
