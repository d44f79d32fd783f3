"""Site preview service: fetches a remote page and returns it ready for inline rendering."""
