"""Services backing the shoe sync pipeline and API."""
