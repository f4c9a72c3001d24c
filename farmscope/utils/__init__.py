"""URL and asset normalization helpers"""
