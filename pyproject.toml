[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ansiblestack"
version = "0.1.0"
description = "Render Ansible inventories and run ansible-playbook from declarative configuration"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["ansible", "inventory", "playbook", "provisioning", "yaml"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ansiblestack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
