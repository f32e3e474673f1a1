"""Infrastructure layer: reading payload files from disk.

This layer depends on stdlib only. It must never import from domain,
services, commands, or output. The service layer bridges between payload
data and the domain models.
"""
