"""Page analysers that each produce one facet of a WebsiteProfile."""
