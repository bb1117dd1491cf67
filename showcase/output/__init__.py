"""Output modules: static HTML pages and page metadata."""
