"""
Boundary layer: datastore, embedding provider, vector index and blob storage adapters.
"""
