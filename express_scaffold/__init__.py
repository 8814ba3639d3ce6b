"""express-scaffold: interactive generator for Express.js + MongoDB backends."""

__version__ = "1.0.0"
