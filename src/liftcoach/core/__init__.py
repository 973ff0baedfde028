"""Pure computation core: catalog, stimulus, aggregation, ranking, plans."""
