"""HTTP layer for the movie catalogue.

Routes validate input, call the repository, and map results to
status codes. No SQL lives here.
"""
