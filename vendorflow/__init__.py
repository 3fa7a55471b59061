"""Vendorflow - daily outreach planning for vendor sequences."""
