"""CampusPool — carpool board and rider/driver messaging for one campus.

Invariants:
    - Package root contains no executable code (no import side-effects)
    - core/ is pure; infrastructure/, services/ and api/ depend on it, never the reverse
"""
