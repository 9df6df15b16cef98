"""CQC Single Assessment Framework statements, Home Office sponsor rules and
the 2026 regulatory horizon."""

SAF_QUALITY_STATEMENTS = [
    {
        "domain": "Safe",
        "qs": "Learning culture",
        "we_statement": (
            "We have a proactive and positive culture of safety based on openness "
            "and honesty, in which concerns about safety are listened to, safety "
            "events are investigated and reported thoroughly, and lessons are "
            "learned to continually identify and embed good practices."
        ),
        "i_statement": (
            "I feel safe and am supported to understand and manage any risks."
        ),
    },
    {
        "domain": "Safe",
        "qs": "Safe systems, pathways and transitions",
        "we_statement": (
            "We work with people and our partners to establish and maintain safe "
            "systems of care, in which safety is managed, monitored and assured. "
            "We ensure continuity of care, including when people move between "
            "different services."
        ),
        "i_statement": (
            "When I move between services, settings or areas, there is a plan for "
            "what happens next and who will do what, and all the practical "
            "arrangements are in place."
        ),
    },
    {
        "domain": "Safe",
        "qs": "Safeguarding",
        "we_statement": (
            "We work with people to understand what being safe means to them as "
            "well as with our partners on the best way to achieve this. We "
            "concentrate on improving people’s lives while protecting their right "
            "to live in safety, free from bullying, harassment, abuse, "
            "discrimination, avoidable harm and neglect. We make sure we share "
            "concerns quickly and appropriately."
        ),
        "i_statement": (
            "I feel safe and am protected from abuse, neglect, harassment and "
            "discrimination."
        ),
    },
    {
        "domain": "Effective",
        "qs": "Assessing needs",
        "we_statement": (
            "We maximise the effectiveness of people’s care and treatment by "
            "assessing and reviewing their health, care, wellbeing and "
            "communication needs with them."
        ),
        "i_statement": (
            "I have care, treatment and support that meets my needs and reflects "
            "my preferences."
        ),
    },
    {
        "domain": "Effective",
        "qs": "Monitor and improve outcomes",
        "we_statement": (
            "We routinely monitor people’s care and treatment to continuously "
            "improve it. We ensure that outcomes are positive and consistent, and "
            "that they meet both clinical expectations and the expectations of "
            "people themselves."
        ),
        "i_statement": (
            "I know what I should expect and what might happen. If things are not "
            "working out, I will be given information and support to help."
        ),
    },
    {
        "domain": "Well-led",
        "qs": "Workforce equality, diversity and inclusion",
        "we_statement": (
            "We value diversity in our workforce. We work towards an inclusive and "
            "fair culture by improving equality and equity for people who work "
            "for us."
        ),
        "i_statement": "I am treated with dignity and respect and I am listened to.",
    },
    {
        "domain": "Well-led",
        "qs": "Governance, management and sustainability",
        "we_statement": (
            "We have clear responsibilities, roles, systems of accountability and "
            "good governance. We use these to manage and deliver good quality, "
            "sustainable care, treatment and support. We act on the best "
            "information about risk, performance and outcomes, and we share this "
            "securely with others when appropriate."
        ),
        "i_statement": (
            "I am confident that the service is well managed and looks after my "
            "information properly."
        ),
    },
]

HOME_OFFICE_2025_RULES = [
    {
        "category": "Recruitment",
        "rule": "Genuine Vacancy Test",
        "detail": (
            "Roles must not be created solely to facilitate a visa. Evidence of "
            "recruitment need (advertisements, minutes) is mandatory."
        ),
        "risk_level": "Critical",
    },
    {
        "category": "Financial",
        "rule": "No Cost Passing",
        "detail": (
            "Since Dec 2024, it is strictly prohibited to pass any part of the CoS "
            "fee or Sponsor Licence fee to the worker."
        ),
        "risk_level": "Critical",
    },
    {
        "category": "Staffing",
        "rule": "Online RTW Checks",
        "detail": (
            "Manual checks for overseas workers are invalid. You must use the Home "
            "Office online system and retain the 'share code' results."
        ),
        "risk_level": "High",
    },
    {
        "category": "Compensation",
        "rule": "January 2026 Salary Thresholds",
        "detail": (
            "Care Worker (6135) minimum increases to £12.82/hr or £25,000/yr "
            "(whichever is higher)."
        ),
        "risk_level": "High",
    },
]

HORIZON_SCANNING_2026 = [
    {
        "domain": "CQC Strategy",
        "title": "New Assessment Framework V2",
        "date": "Summer 2026",
        "details": (
            "New dynamic assessment frameworks published, with full implementation "
            "by End of 2026. Shift to 'Smarter Regulation' using data-driven risk "
            "models."
        ),
        "impact": "High",
        "action": (
            "Expect more frequent remote data requests; ensure digital records are "
            "API-ready."
        ),
    },
    {
        "domain": "Immigration",
        "title": "ETA & Contactless Border",
        "date": "Feb 2026",
        "details": (
            "Electronic Travel Authorisation (ETA) becomes mandatory for all "
            "non-visa nationals (US, EU, etc.). Full 'Contactless Border' vision."
        ),
        "impact": "Medium",
        "action": (
            "Update recruitment capability policies. Inform visiting families from "
            "abroad about ETA requirements."
        ),
    },
    {
        "domain": "Immigration",
        "title": "End of Visa Vignettes (Digital Only)",
        "date": "Late 2026",
        "details": (
            "Physical vignettes stopped. Move to pure 'eVisa' status. BRPs/BRCs "
            "phased out completely."
        ),
        "impact": "Critical",
        "action": (
            "Ensure all sponsored staff have created their UKVI digital accounts. "
            "Audit physical files to ensure no reliance on expiring BRPs."
        ),
    },
    {
        "domain": "Legal",
        "title": "LPS Consultation (Liberty Protection)",
        "date": "Early 2026",
        "details": (
            "Consultation on Liberty Protection Safeguards (LPS) to replace DoLS. "
            "Implementation likely 2027."
        ),
        "impact": "High",
        "action": (
            "Prepare for training updates on Mental Capacity Act. DoLS remains "
            "legal framework until then."
        ),
    },
]
