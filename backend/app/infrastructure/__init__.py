"""Infrastructure Layer: database, signing, hashing, mail and logging adapters.

Invariants:
    - Adapters expose small, typed interfaces (see core/boundary_protocols.py)
    - Blocking libraries (bcrypt, smtplib) run off the event loop
"""
