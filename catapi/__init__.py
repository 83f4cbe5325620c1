"""Cat records API: REST and GraphQL over users and the cats they own."""

__version__ = "0.1.0"
