[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qexlisp"
version = "0.0.1"
description = "Value types, environments and an evaluator for a small Lisp with S-expressions, Q-expressions and lambdas"
requires-python = ">=3.10"
dependencies = []
keywords = ["lisp", "interpreter", "s-expression", "q-expression", "lambda"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["qexlisp"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
