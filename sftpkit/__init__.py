"""Building blocks for an SFTP file server: wire encoding, handles, request ordering, worker threads and path handling."""

__version__ = "0.1.0"