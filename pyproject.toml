[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sftpkit"
version = "0.1.0"
description = "Building blocks for an SFTP server: wire encoding, handles, request ordering, worker pools and path handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["sftp", "ssh", "file transfer", "protocol", "server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sftpkit"]

[tool.pytest.ini_options]
addopts = "-ra"
