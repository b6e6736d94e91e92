[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "checkout-services"
version = "1.0.0"
description = "Authentication and inventory microservices for an automated checkout point of sale"
requires-python = ">=3.10"
dependencies = []
keywords = ["checkout", "point-of-sale", "inventory", "audit-log", "authentication", "microservice"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
checkout-authentication = "checkout_services.authentication.controller:main"
checkout-inventory = "checkout_services.inventory.controller:main"

[tool.hatch.build.targets.wheel]
packages = ["checkout_services"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
