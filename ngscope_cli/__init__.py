"""ngscope: structural facts extractor for Angular source trees."""

__version__ = "0.3.0"
