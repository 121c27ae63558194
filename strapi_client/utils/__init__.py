"""Utility modules for strapi-client."""
