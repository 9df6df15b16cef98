"""Policy rules evaluated by the gap analysis rule engine.

A policy covers a rule's topic when it mentions any of ``keywords``; it meets
the standard only when it also mentions one of ``critical_keywords``.
"""

COMPLIANCE_RULES = [
    {
        "id": "consent",
        "name": "Consent Policy",
        "regulation": "Regulation 9 (Person-centred care)",
        "keywords": ["consent", "capacity", "permission", "agreement"],
        "critical_keywords": ["mental capacity act", "best interest"],
        "failure_msg": "No mention of Mental Capacity Act principles found.",
    },
    {
        "id": "safeguarding",
        "name": "Safeguarding Policy",
        "regulation": "Regulation 13 (Safeguarding)",
        "keywords": ["safeguarding", "abuse", "protect"],
        "critical_keywords": ["whistleblowing", "local authority"],
        "failure_msg": "Whistleblowing procedure is not clearly defined or linked.",
    },
    {
        "id": "medicines",
        "name": "Medicines Management",
        "regulation": "Regulation 12 (Safe Care)",
        "keywords": ["medicine", "medication", "drug"],
        "critical_keywords": ["mar chart", "administration record", "disposal"],
        "failure_msg": (
            "No evidence of MAR chart templates or competency assessment logs."
        ),
    },
    {
        "id": "recruitment",
        "name": "Recruitment Policy",
        "regulation": "Regulation 19 (Fit and proper persons)",
        "keywords": ["recruitment", "hiring", "interview"],
        "critical_keywords": ["dbs", "criminal record", "reference"],
        "failure_msg": "DBS check procedures appear missing.",
    },
    {
        "id": "governance",
        "name": "Good Governance",
        "regulation": "Regulation 17 (Good governance)",
        "keywords": ["audit", "governance", "quality assurance", "monitor"],
        "critical_keywords": ["action plan", "improvement", "risk register"],
        "failure_msg": (
            "Quality assurance framework or risk register mentions are missing."
        ),
    },
    {
        "id": "staffing",
        "name": "Staffing",
        "regulation": "Regulation 18 (Staffing)",
        "keywords": ["training", "induction", "staff", "supervision"],
        "critical_keywords": ["competency", "appraisal", "mandatory training"],
        "failure_msg": (
            "Processes for staff competency checks or appraisals are not evident."
        ),
    },
]
