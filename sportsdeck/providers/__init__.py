"""Remote data providers.

Each provider package holds a raw HTTP client; normalization of sports
payloads lives in thesportsdb.normalizer.
"""
