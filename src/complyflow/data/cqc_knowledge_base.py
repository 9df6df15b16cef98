"""Reference text on CQC regulations used to ground AI answers."""

CQC_KNOWLEDGE_BASE = """
OFFICIAL CQC REGULATIONS REFERENCE (HEALTH AND SOCIAL CARE ACT 2008 (REGULATED ACTIVITIES) REGULATIONS 2014):

=== FUNDAMENTAL STANDARDS OF CARE ===

REGULATION 9: Person-centred care
- Care and treatment must be appropriate, meet the service user's needs, and reflect their preferences.
- Assessment of needs must be collaborative with the service user.
- Care and treatment must be reviewed regularly and adjusted as the person's needs change.
- Providers must work collaboratively with other providers where this will benefit the person.

REGULATION 10: Dignity and respect
- Service users must be treated with dignity and respect at all times.
- This includes respecting the person's privacy, autonomy, and independence.
- Staff must respect and support the person's right to make their own decisions.
- Appropriate standards of privacy must be maintained during care and treatment.

REGULATION 11: Need for consent
- Care and treatment must only be provided with the consent of the relevant person.
- If a person lacks capacity to consent, the Mental Capacity Act 2005 must be followed.
- Best Interest decisions must be recorded appropriately and involve relevant parties.
- Where consent is given, it must be informed and documented.

REGULATION 12: Safe care and treatment
- Care and treatment must be provided in a safe way for service users.
- Provider must assess the risks to health and safety of service users.
- Robust risk assessments must be in place and regularly updated.
- Safe medicines management (storage, administration, recording, disposal).
- Proper infection prevention and control protocols.
- Equipment must be safe, suitable, and properly maintained.
- Premises must be safe and suitable for the care being provided.

REGULATION 13: Safeguarding users from abuse and improper treatment
- Service users must be protected from abuse and improper treatment.
- Systems and processes must be in place to prevent abuse (including physical, psychological, sexual, financial abuse and neglect).
- Staff must be trained in safeguarding and know how to report concerns.
- Allegations must be properly investigated and reported to CQC and local authorities.
- No unlawful restraint or restriction of liberty.

REGULATION 14: Meeting nutritional and hydration needs
- Service users must receive adequate nutrition and hydration.
- Nutritional and hydration needs must be assessed and met.
- People who need support with eating and drinking must receive appropriate help.
- Special dietary requirements must be met.

REGULATION 15: Premises and equipment
- Premises must be clean, suitable, properly maintained, and fit for purpose.
- Equipment used in care must be clean, suitable, and functioning correctly.
- Premises must be secure and appropriate for the care provided.

REGULATION 16: Receiving and acting on complaints
- There must be an accessible and effective complaints system.
- Complaints must be investigated thoroughly and appropriately.
- Complainants must be kept informed and receive a timely response.
- Any complaints involving other providers must be shared appropriately.

REGULATION 17: Good governance
- Systems must be established and operated effectively to assess, monitor, and improve quality and safety.
- Providers must assess, monitor, and mitigate risks to service users.
- Accurate, complete, and contemporaneous records must be maintained.
- Records must be kept securely and accessed only by authorised persons.
- Feedback from service users, families, and staff must be sought and acted upon.

REGULATION 18: Staffing
- Sufficient numbers of suitably qualified, competent, skilled, and experienced persons must be deployed.
- Staff must receive appropriate support, training, professional development, supervision, and appraisal.
- Safe staffing levels must be maintained at all times.

REGULATION 19: Fit and proper persons employed
- Robust recruitment procedures must be in place.
- Persons employed must be of good character and have the necessary qualifications, skills, and experience.
- DBS checks must be carried out in accordance with Schedule 3.
- References and verification of employment history must be obtained.

REGULATION 20: Duty of candour
- Providers must act in an open and transparent way.
- Service users must be informed when things go wrong that cause harm.
- An apology (verbal and written) must be provided when a notifiable safety incident occurs.
- Reasonable support must be offered to the affected person.

=== CQC SINGLE ASSESSMENT FRAMEWORK (2024) ===

The CQC introduced a new Single Assessment Framework in 2024, replacing the previous Key Lines of Enquiry (KLOEs) with 34 Quality Statements organized under 5 Key Questions.

FIVE KEY QUESTIONS:

1. SAFE (Are people protected from abuse and avoidable harm?)
Quality Statements:
- S1: Learning culture - Proactive safety culture based on openness and honesty
- S2: Safe systems, pathways and transitions - Continuity of care maintained
- S3: Safeguarding - Protecting people's right to live free from abuse
- S4: Involving people to manage risks - Positive risk-taking approach
- S5: Safe environments - Risk detection and control in care settings
- S6: Safe and effective staffing - Sufficient qualified and skilled staff
- S7: Infection prevention and control - Managing infection risks
- S8: Medicines optimisation - Safe medication management

2. EFFECTIVE (Does care achieve good outcomes and promote quality of life?)
Quality Statements:
- E1: Assessing needs - Comprehensive and ongoing assessment
- E2: Delivering evidence-based care - Using current best practice
- E3: How staff, teams and services work together - Collaborative working
- E4: Supporting people to live healthier lives - Health promotion
- E5: Monitoring and improving outcomes - Continuous improvement
- E6: Consent to care and treatment - Respecting people's rights

3. CARING (Do staff treat people with compassion, kindness, dignity, and respect?)
Quality Statements:
- C1: Kindness, compassion and dignity - Treating people with empathy
- C2: Treating people as individuals - Recognising unique needs
- C3: Independence, choice and control - Promoting autonomy
- C4: Responding to people's immediate needs - Timely responsive care
- C5: Workforce wellbeing and enablement - Supporting staff

4. RESPONSIVE (Are services organised so they meet people's needs?)
Quality Statements:
- R1: Person-centred care - Involving people in decisions
- R2: Care provision, integration and continuity - Joined-up care
- R3: Providing information - Accessible and accurate information
- R4: Listening to and involving people - Acting on feedback
- R5: Equity in access - Removing barriers to care
- R6: Equity in experience and outcomes - Addressing inequality
- R7: Planning for the future - End of life and advance care planning

5. WELL-LED (Is the leadership, management, and governance assuring high-quality care?)
Quality Statements:
- W1: Shared direction and culture - Clear vision and values
- W2: Capable, compassionate and inclusive leaders - Effective leadership
- W3: Freedom to speak up - Encouraging staff voice
- W4: Workforce equality, diversity and inclusion - Fair treatment
- W5: Governance, management and sustainability - Good governance systems
- W6: Partnerships and communities - Collaborative working
- W7: Learning, improvement and innovation - Continuous development
- W8: Environmental sustainability - Reducing environmental impact

=== CQC SCORING SYSTEM ===

Evidence is scored on a 1-4 scale:
1 - Inadequate: Significant failings affecting people's safety or care quality
2 - Requires Improvement: Performance not consistently meeting expectations
3 - Good: Service is performing well and meeting expectations
4 - Outstanding: Service is performing exceptionally well

=== EVIDENCE CATEGORIES ===

CQC considers evidence from six categories:
1. People's experience of health and care services
2. Feedback from staff and leaders
3. Feedback from partners
4. Observation
5. Processes
6. Outcomes

=== NOTIFIABLE EVENTS ===

Registered managers must notify CQC of:
- Deaths of service users
- Serious injuries
- Abuse or allegations of abuse
- Deprivation of liberty applications and authorisations
- Events that prevent the service from running normally
- Police involvement
- Other incidents specified in regulations
"""
