# ================================================================================
"""
The 'teams' app keeps the World Cup qualifying board: teams grouped by zone,
their win counts, the one-time seed import and the live list reconciliation.
"""
