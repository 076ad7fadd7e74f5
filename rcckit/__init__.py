"""Radio control container building blocks and a Silvus radio JSON-RPC mock."""

__version__ = "1.0.0"