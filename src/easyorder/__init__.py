"""EasyOrder — B2B ordering storefront.

Catalogue, regional shipping routes, shopping carts, order placement with a
generated confirmation email, and CSV export of the order ledger.
"""
