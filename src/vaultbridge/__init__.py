"""vaultbridge — carry wiki-links and asset embeds between a vault and a document store."""

__version__ = "0.1.0"
