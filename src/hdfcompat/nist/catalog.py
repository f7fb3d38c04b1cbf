"""
Static NIST SP 800-53 Rev. 4 catalog data.

NIST_FAMILIES lists every control family together with the number of base
controls it defines. "UM" (Unmapped) is a pseudo-family used for controls
that carry no NIST tags at all.

ALL_NIST_CONTROL_NUMBERS is the flat list of control identifiers the
hierarchy is built from. Entries are not guaranteed to be listed
parent-before-child, and a few enhancements appear without their parent;
the hierarchy builder fills those gaps with stub nodes.
"""

from __future__ import annotations

# Format is (code, name, number of base controls)
NIST_FAMILIES: list[tuple[str, str, int]] = [
    ("UM", "Unmapped", 1),
    ("AC", "Access Control", 25),
    ("AU", "Audit and Accountability", 16),
    ("AT", "Awareness and Training", 5),
    ("CM", "Configuration Management", 11),
    ("CP", "Contingency Planning", 13),
    ("IA", "Identification and Authentication", 11),
    ("IR", "Incident Response", 10),
    ("MA", "Maintenance", 6),
    ("MP", "Media Protection", 8),
    ("PS", "Personnel Security", 8),
    ("PE", "Physical and Environmental Protection", 20),
    ("PL", "Planning", 9),
    ("PM", "Program Management", 16),
    ("RA", "Risk Assessment", 6),
    ("CA", "Security Assessment and Authorization", 9),
    ("SC", "System and Communications Protection", 44),
    ("SI", "System and Information Integrity", 17),
    ("SA", "System and Services Acquisition", 22),
]

ALL_NIST_FAMILIES: list[str] = [code for code, _, _ in NIST_FAMILIES]

_FAMILY_NAMES: dict[str, str] = {code: name for code, name, _ in NIST_FAMILIES}

ALL_NIST_CONTROL_NUMBERS: list[str] = [
    # Unmapped
    "UM-1",
    # Access Control
    "AC-1", "AC-1a.", "AC-1a.1.", "AC-1a.2.", "AC-1b.", "AC-1b.1.", "AC-1b.2.",
    "AC-2", "AC-2a.", "AC-2b.", "AC-2c.", "AC-2d.", "AC-2e.", "AC-2f.", "AC-2g.",
    "AC-2h.", "AC-2h.1.", "AC-2h.2.", "AC-2h.3.", "AC-2i.", "AC-2j.", "AC-2k.",
    "AC-2 (1)", "AC-2 (2)", "AC-2 (3)", "AC-2 (4)", "AC-2 (5)", "AC-2 (7)",
    "AC-2 (7)(a)", "AC-2 (7)(b)", "AC-2 (9)", "AC-2 (10)", "AC-2 (11)",
    "AC-2 (12)(a)", "AC-2 (12)(b)", "AC-2 (12)", "AC-2 (13)",
    "AC-3", "AC-3 (2)", "AC-3 (4)", "AC-3 (7)", "AC-3 (8)", "AC-3 (9)",
    "AC-4", "AC-4 (4)", "AC-4 (8)", "AC-4 (21)",
    "AC-5", "AC-5a.", "AC-5b.", "AC-5c.",
    "AC-6", "AC-6 (1)", "AC-6 (2)", "AC-6 (3)", "AC-6 (5)", "AC-6 (7)",
    "AC-6 (8)", "AC-6 (9)", "AC-6 (10)",
    "AC-7", "AC-7a.", "AC-7b.", "AC-7 (2)",
    "AC-8", "AC-8a.", "AC-8a.1.", "AC-8a.2.", "AC-8a.3.", "AC-8a.4.", "AC-8b.",
    "AC-8c.", "AC-8c.1.", "AC-8c.2.", "AC-8c.3.",
    "AC-9", "AC-9a.", "AC-9 (1)",
    "AC-10", "AC-11", "AC-11a.", "AC-11b.", "AC-11 (1)",
    "AC-12", "AC-12 (1)", "AC-13", "AC-14", "AC-14a.", "AC-14b.", "AC-15",
    "AC-16", "AC-17", "AC-17a.", "AC-17b.", "AC-17 (1)", "AC-17 (2)",
    "AC-17 (3)", "AC-17 (4)", "AC-17 (4)(a)", "AC-17 (4)(b)", "AC-17 (9)",
    "AC-18", "AC-18 (1)", "AC-18 (3)", "AC-18 (4)", "AC-18 (5)",
    "AC-19", "AC-19 (5)", "AC-20", "AC-20 (1)", "AC-20 (2)", "AC-21",
    "AC-22", "AC-23", "AC-24", "AC-25",
    # Awareness and Training
    "AT-1", "AT-2", "AT-2 (2)", "AT-3", "AT-3 (3)", "AT-4", "AT-5",
    # Audit and Accountability
    "AU-1", "AU-2", "AU-2a.", "AU-2b.", "AU-2c.", "AU-2d.", "AU-2 (3)",
    "AU-3", "AU-3 (1)", "AU-3 (2)", "AU-4", "AU-4 (1)",
    "AU-5", "AU-5a.", "AU-5b.", "AU-5 (1)", "AU-5 (2)",
    "AU-6", "AU-6 (1)", "AU-6 (3)", "AU-6 (4)", "AU-6 (5)", "AU-6 (6)",
    "AU-7", "AU-7 (1)", "AU-8", "AU-8a.", "AU-8b.", "AU-8 (1)", "AU-8 (1)(a)",
    "AU-8 (1)(b)", "AU-9", "AU-9 (2)", "AU-9 (3)", "AU-9 (4)",
    "AU-10", "AU-11", "AU-12", "AU-12a.", "AU-12b.", "AU-12c.", "AU-12 (1)",
    "AU-12 (3)", "AU-13", "AU-14", "AU-14 (1)", "AU-15", "AU-16",
    # Security Assessment and Authorization
    "CA-1", "CA-2", "CA-2 (1)", "CA-2 (2)", "CA-3", "CA-3 (5)", "CA-4",
    "CA-5", "CA-6", "CA-7", "CA-7 (1)", "CA-8", "CA-9",
    # Configuration Management
    "CM-1", "CM-2", "CM-2 (1)", "CM-2 (2)", "CM-2 (3)", "CM-2 (7)",
    "CM-3", "CM-3 (1)", "CM-3 (2)", "CM-4", "CM-4 (1)", "CM-5", "CM-5 (1)",
    "CM-5 (2)", "CM-5 (3)", "CM-5 (5)", "CM-5 (6)",
    "CM-6", "CM-6a.", "CM-6b.", "CM-6c.", "CM-6d.", "CM-6 (1)", "CM-6 (2)",
    "CM-7", "CM-7a.", "CM-7b.", "CM-7 (1)", "CM-7 (2)", "CM-7 (4)", "CM-7 (5)",
    "CM-8", "CM-8 (1)", "CM-8 (2)", "CM-8 (3)", "CM-9", "CM-10", "CM-10 (1)",
    "CM-11", "CM-11 (1)",
    # Contingency Planning
    "CP-1", "CP-2", "CP-2 (1)", "CP-2 (3)", "CP-3", "CP-4", "CP-4 (1)",
    "CP-5", "CP-6", "CP-6 (1)", "CP-7", "CP-7 (1)", "CP-8", "CP-9",
    "CP-9 (1)", "CP-10", "CP-10 (2)", "CP-11", "CP-12", "CP-13",
    # Identification and Authentication
    "IA-1", "IA-2", "IA-2 (1)", "IA-2 (2)", "IA-2 (3)", "IA-2 (4)", "IA-2 (5)",
    "IA-2 (8)", "IA-2 (9)", "IA-2 (11)", "IA-2 (12)", "IA-3", "IA-4",
    "IA-4 (4)", "IA-5", "IA-5 (1)", "IA-5 (1)(a)", "IA-5 (1)(b)", "IA-5 (1)(c)",
    "IA-5 (1)(d)", "IA-5 (1)(e)", "IA-5 (1)(f)", "IA-5 (2)", "IA-5 (4)",
    "IA-5 (11)", "IA-5 (13)", "IA-6", "IA-7", "IA-8", "IA-8 (1)", "IA-9",
    "IA-10", "IA-11",
    # Incident Response
    "IR-1", "IR-2", "IR-3", "IR-4", "IR-4 (1)", "IR-5", "IR-6", "IR-6 (1)",
    "IR-7", "IR-8", "IR-9", "IR-10",
    # Maintenance
    "MA-1", "MA-2", "MA-3", "MA-4", "MA-4 (6)", "MA-5", "MA-6",
    # Media Protection
    "MP-1", "MP-2", "MP-3", "MP-4", "MP-5", "MP-5 (4)", "MP-6", "MP-7",
    "MP-7 (1)", "MP-8",
    # Physical and Environmental Protection
    "PE-1", "PE-2", "PE-3", "PE-4", "PE-5", "PE-6", "PE-6 (1)", "PE-7",
    "PE-8", "PE-9", "PE-10", "PE-11", "PE-12", "PE-13", "PE-14", "PE-15",
    "PE-16", "PE-17", "PE-18", "PE-19", "PE-20",
    # Planning
    "PL-1", "PL-2", "PL-2 (3)", "PL-3", "PL-4", "PL-4 (1)", "PL-5", "PL-6",
    "PL-7", "PL-8", "PL-9",
    # Personnel Security
    "PS-1", "PS-2", "PS-3", "PS-4", "PS-5", "PS-6", "PS-7", "PS-8",
    # Risk Assessment
    "RA-1", "RA-2", "RA-3", "RA-4", "RA-5", "RA-5 (1)", "RA-5 (2)",
    "RA-5 (5)", "RA-6",
    # System and Services Acquisition
    "SA-1", "SA-2", "SA-3", "SA-4", "SA-4 (1)", "SA-4 (2)", "SA-4 (9)",
    "SA-4 (10)", "SA-5", "SA-6", "SA-7", "SA-8", "SA-9", "SA-9 (2)", "SA-10",
    "SA-11", "SA-12", "SA-13", "SA-14", "SA-15", "SA-16", "SA-17", "SA-18",
    "SA-19", "SA-20", "SA-21", "SA-22",
    # System and Communications Protection
    "SC-1", "SC-2", "SC-3", "SC-4", "SC-5", "SC-6", "SC-7", "SC-7 (3)",
    "SC-7 (4)(a)", "SC-7 (4)(b)", "SC-7 (5)", "SC-7 (7)", "SC-7 (8)",
    "SC-7 (18)", "SC-7 (21)", "SC-8", "SC-8 (1)", "SC-8 (2)", "SC-9",
    "SC-10", "SC-11", "SC-12", "SC-12 (1)", "SC-13", "SC-14", "SC-15",
    "SC-16", "SC-17", "SC-18", "SC-19", "SC-20", "SC-21", "SC-22", "SC-23",
    "SC-24", "SC-25", "SC-26", "SC-27", "SC-28", "SC-28 (1)", "SC-29",
    "SC-30", "SC-31", "SC-32", "SC-33", "SC-34", "SC-35", "SC-36", "SC-37",
    "SC-38", "SC-39", "SC-40", "SC-41", "SC-42", "SC-43", "SC-44",
    # System and Information Integrity
    "SI-1", "SI-2", "SI-2 (1)", "SI-2 (2)", "SI-2 (3)", "SI-3", "SI-3 (1)",
    "SI-3 (2)", "SI-4", "SI-4a.", "SI-4a.1.", "SI-4a.2.", "SI-4b.", "SI-4c.",
    "SI-4 (2)", "SI-4 (4)", "SI-4 (5)", "SI-4 (12)", "SI-4 (14)", "SI-4 (16)",
    "SI-4 (23)", "SI-5", "SI-5 (1)", "SI-6", "SI-7 (14)(a)", "SI-7 (14)(b)",
    "SI-7", "SI-7 (1)", "SI-7 (2)", "SI-7 (5)", "SI-7 (7)", "SI-7 (14)",
    "SI-8", "SI-8 (1)", "SI-8 (2)", "SI-9", "SI-10", "SI-11", "SI-12",
    "SI-13", "SI-14", "SI-15", "SI-16", "SI-17",
    # Program Management
    "PM-1", "PM-2", "PM-3", "PM-4", "PM-5", "PM-6", "PM-7", "PM-8", "PM-9",
    "PM-10", "PM-11", "PM-12", "PM-13", "PM-14", "PM-15", "PM-16",
]


def get_family_name(code: str) -> str | None:
    """
    Get the display name of a control family.

    Args:
        code: Two-letter family code (e.g., "AC").

    Returns:
        Family name, or None if the code is not a known family.
    """
    return _FAMILY_NAMES.get(code)
