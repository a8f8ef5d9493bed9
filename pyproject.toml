[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "authdemo"
version = "0.1.0"
description = "Small WSGI authentication services: cookie sessions over an in-memory user store, and HS256 JWT login."
requires-python = ">=3.10"
keywords = ["authentication", "session", "cookies", "jwt", "wsgi", "werkzeug"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Session",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "werkzeug",
    "pyjwt",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
authdemo-server = "authdemo.server:main"
authdemo-jwt = "authdemo.jwt_app:main"

[tool.hatch.build.targets.wheel]
packages = ["authdemo"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
