"""Frontend helpers: HTTP client and Streamlit page."""
