[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shopifygql"
version = "9.0.0"
description = "Client for the Shopify Admin GraphQL API with bulk operation support"
requires-python = ">=3.10"
dependencies = []
keywords = ["shopify", "graphql", "admin-api", "bulk-operations", "ecommerce"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shopifygql"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
