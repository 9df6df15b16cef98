"""CQC Single Assessment Framework material for mock inspection interviews.

Holds the quality statements, the interview question bank, predefined
interview scenarios, key-question metadata and the 1-4 scoring rubric.
"""

# CQC 2024 Quality Statements (34 statements organized by Key Question)
QUALITY_STATEMENTS = [
    # SAFE
    {
        "id": 'S1',
        "key_question": 'safe',
        "title": 'Learning culture',
        "we_statement": 'We have a proactive and positive culture of safety based on openness and honesty, in which concerns about safety are listened to, safety events are investigated and reported thoroughly, and lessons are learned to continually identify and embed good practice.',
        "evidence_categories": ['incident reporting', 'root cause analysis', 'staff feedback', 'safety improvements']
    },
    {
        "id": 'S2',
        "key_question": 'safe',
        "title": 'Safe systems, pathways and transitions',
        "we_statement": 'We work with people and our partners to establish and maintain safe systems of care, in which safety is managed or monitored. We ensure continuity of care, including when people move between different services.',
        "evidence_categories": ['care transitions', 'handover procedures', 'multi-agency working', 'discharge planning']
    },
    {
        "id": 'S3',
        "key_question": 'safe',
        "title": 'Safeguarding',
        "we_statement": 'We work with people to understand what being safe means to them as well as with our partners on the best way to achieve this. We concentrate on improving people\'s lives while protecting their right to live in safety, free from bullying, harassment, abuse, discrimination, avoidable harm and neglect.',
        "evidence_categories": ['safeguarding policies', 'staff training', 'incident reports', 'partner agency relationships']
    },
    {
        "id": 'S4',
        "key_question": 'safe',
        "title": 'Involving people to manage risks',
        "we_statement": 'We work with people to understand and manage risks by thinking holistically so that care is provided in a way that balances risks with positive choice and control.',
        "evidence_categories": ['risk assessments', 'person-centred care plans', 'consent documentation', 'positive risk-taking']
    },
    {
        "id": 'S5',
        "key_question": 'safe',
        "title": 'Safe environments',
        "we_statement": 'We detect and control potential risks in the care environment. We make sure equipment, facilities and technology support the delivery of safe care.',
        "evidence_categories": ['environmental audits', 'equipment maintenance', 'infection control', 'fire safety']
    },
    {
        "id": 'S6',
        "key_question": 'safe',
        "title": 'Safe and effective staffing',
        "we_statement": 'We make sure there are enough qualified, skilled and experienced staff, who receive effective support, supervision and development. They work together effectively to provide safe care that meets people\'s individual needs.',
        "evidence_categories": ['staffing levels', 'training records', 'supervision records', 'staff deployment']
    },
    {
        "id": 'S7',
        "key_question": 'safe',
        "title": 'Infection prevention and control',
        "we_statement": 'We assess and manage the risk of infection. We detect and control the risk of it spreading and share any concerns with appropriate agencies promptly.',
        "evidence_categories": ['IPC audits', 'PPE usage', 'outbreak management', 'staff training']
    },
    {
        "id": 'S8',
        "key_question": 'safe',
        "title": 'Medicines optimisation',
        "we_statement": 'We make sure that medicines and treatments are safe and meet people\'s needs, capacities and preferences. We involve them in planning.',
        "evidence_categories": ['MAR charts', 'medication audits', 'storage checks', 'PRN protocols']
    },

    # EFFECTIVE
    {
        "id": 'E1',
        "key_question": 'effective',
        "title": 'Assessing needs',
        "we_statement": 'We maximise the effectiveness of people\'s care and treatment by assessing and reviewing their health, care, wellbeing and communication needs with them.',
        "evidence_categories": ['initial assessments', 'ongoing reviews', 'outcome measures', 'specialist referrals']
    },
    {
        "id": 'E2',
        "key_question": 'effective',
        "title": 'Delivering evidence-based care and treatment',
        "we_statement": 'We plan and deliver people\'s care and treatment with them, including what is important and matters to them. We do this in line with legislation and current evidence-based good practice and standards.',
        "evidence_categories": ['care plans', 'best practice guidelines', 'clinical protocols', 'research implementation']
    },
    {
        "id": 'E3',
        "key_question": 'effective',
        "title": 'How staff, teams and services work together',
        "we_statement": 'We work well with other agencies to make sure people receive effective, joined-up care. All those involved with a person\'s care work collaboratively in their best interests.',
        "evidence_categories": ['MDT meetings', 'referral pathways', 'information sharing', 'joint assessments']
    },
    {
        "id": 'E4',
        "key_question": 'effective',
        "title": 'Supporting people to live healthier lives',
        "we_statement": 'We support people to manage their health and wellbeing so they can maximise their independence, choice and control. We support them to live healthier lives and where possible, reduce their future needs for care and support.',
        "evidence_categories": ['health promotion', 'preventive care', 'lifestyle support', 'vaccination uptake']
    },
    {
        "id": 'E5',
        "key_question": 'effective',
        "title": 'Monitoring and improving outcomes',
        "we_statement": 'We routinely monitor people\'s care and treatment to continuously improve it. We ensure that outcomes are positive and consistent, and that they meet both clinical expectations and the expectations of people themselves.',
        "evidence_categories": ['outcome tracking', 'quality indicators', 'service user feedback', 'continuous improvement']
    },
    {
        "id": 'E6',
        "key_question": 'effective',
        "title": 'Consent to care and treatment',
        "we_statement": 'We tell people about their rights around consent and respect these when we deliver person-centred care and treatment.',
        "evidence_categories": ['consent forms', 'capacity assessments', 'best interest decisions', 'MCA documentation']
    },

    # CARING
    {
        "id": 'C1',
        "key_question": 'caring',
        "title": 'Kindness, compassion and dignity',
        "we_statement": 'We always treat people with kindness, empathy and compassion. We make sure people\'s dignity is respected and we provide care and treatment in a caring and considerate way.',
        "evidence_categories": ['observations', 'service user feedback', 'complaints data', 'staff interactions']
    },
    {
        "id": 'C2',
        "key_question": 'caring',
        "title": 'Treating people as individuals',
        "we_statement": 'We treat people as individuals and make sure their care, support and treatment meets their needs and preferences. We take account of their strengths, abilities and aspirations, as well as their rights.',
        "evidence_categories": ['personalised care plans', 'life history work', 'cultural preferences', 'individual routines']
    },
    {
        "id": 'C3',
        "key_question": 'caring',
        "title": 'Independence, choice and control',
        "we_statement": 'We promote people\'s independence, so they know their rights and have choice and control over their own care, treatment and wellbeing.',
        "evidence_categories": ['choice audits', 'advocacy access', 'independence promotion', 'self-management support']
    },
    {
        "id": 'C4',
        "key_question": 'caring',
        "title": 'Responding to people\'s immediate needs',
        "we_statement": 'We listen to and understand people\'s needs, views and wishes. We respond to these in a timely manner and without having to wait for a formal review.',
        "evidence_categories": ['response times', 'immediate adaptations', 'real-time feedback', 'flexible care delivery']
    },
    {
        "id": 'C5',
        "key_question": 'caring',
        "title": 'Workforce wellbeing and enablement',
        "we_statement": 'We care about and promote the wellbeing of our staff, and support and enable them to always deliver person-centred care.',
        "evidence_categories": ['staff wellbeing surveys', 'support programs', 'workload management', 'recognition schemes']
    },

    # RESPONSIVE
    {
        "id": 'R1',
        "key_question": 'responsive',
        "title": 'Person-centred care',
        "we_statement": 'We make sure people are at the centre of their care and treatment choices and we decide, in partnership with them, how to respond to any relevant changes in their needs.',
        "evidence_categories": ['care planning involvement', 'review participation', 'preference recording', 'flexible responses']
    },
    {
        "id": 'R2',
        "key_question": 'responsive',
        "title": 'Care provision, integration and continuity',
        "we_statement": 'We understand the diverse health and care needs of people and our local communities, so care is joined-up, flexible and supports choice and continuity.',
        "evidence_categories": ['community needs assessment', 'service integration', 'continuity of care', 'flexible delivery']
    },
    {
        "id": 'R3',
        "key_question": 'responsive',
        "title": 'Providing information',
        "we_statement": 'We provide appropriate, accurate and up-to-date information in formats that we tailor to individual needs.',
        "evidence_categories": ['accessible information', 'communication formats', 'information accuracy', 'timely provision']
    },
    {
        "id": 'R4',
        "key_question": 'responsive',
        "title": 'Listening to and involving people',
        "we_statement": 'We make it easy for people to share feedback and ideas, or raise complaints about their care, treatment and support. We involve them in decisions about their care and tell them what\'s changed as a result.',
        "evidence_categories": ['feedback mechanisms', 'complaint handling', 'changes made', 'communication of outcomes']
    },
    {
        "id": 'R5',
        "key_question": 'responsive',
        "title": 'Equity in access',
        "we_statement": 'We make sure that everyone can access the care, support and treatment they need when they need it. We prioritise people with the most urgent needs.',
        "evidence_categories": ['access audits', 'waiting times', 'barrier removal', 'priority systems']
    },
    {
        "id": 'R6',
        "key_question": 'responsive',
        "title": 'Equity in experience and outcomes',
        "we_statement": 'We actively seek out and listen to information about people who are most likely to experience inequality in experience or outcomes. We tailor the care, support and treatment in response to this.',
        "evidence_categories": ['equality monitoring', 'outcome disparities', 'targeted interventions', 'inclusive practices']
    },
    {
        "id": 'R7',
        "key_question": 'responsive',
        "title": 'Planning for the future',
        "we_statement": 'We support people to plan for important life changes, so they can have enough time to make informed decisions about their future, including at the end of their life.',
        "evidence_categories": ['advance care planning', 'end of life care', 'future planning', 'family involvement']
    },

    # WELL-LED
    {
        "id": 'W1',
        "key_question": 'well_led',
        "title": 'Shared direction and culture',
        "we_statement": 'We have a shared vision, strategy and culture. This is based on transparency, equity, equality and human rights, diversity and inclusion, engagement, and understanding challenges and the needs of people and our communities.',
        "evidence_categories": ['vision statements', 'cultural assessments', 'EDI strategies', 'community engagement']
    },
    {
        "id": 'W2',
        "key_question": 'well_led',
        "title": 'Capable, compassionate and inclusive leaders',
        "we_statement": 'We have inclusive leaders at all levels who understand the context in which we deliver care, treatment and support. They embody the culture and values of their workforce and organisation. Leaders have the skills, knowledge, experience and credibility to lead effectively.',
        "evidence_categories": ['leadership development', 'inclusive leadership', 'leader visibility', 'staff engagement']
    },
    {
        "id": 'W3',
        "key_question": 'well_led',
        "title": 'Freedom to speak up',
        "we_statement": 'We foster a positive culture where people feel they can speak up and their voice will be heard.',
        "evidence_categories": ['whistleblowing policy', 'speaking up culture', 'anonymous feedback', 'action on concerns']
    },
    {
        "id": 'W4',
        "key_question": 'well_led',
        "title": 'Workforce equality, diversity and inclusion',
        "we_statement": 'We value diversity in our workforce. We work towards an inclusive and fair culture by improving equality and equity for people who work for us.',
        "evidence_categories": ['workforce demographics', 'EDI training', 'fair recruitment', 'inclusive practices']
    },
    {
        "id": 'W5',
        "key_question": 'well_led',
        "title": 'Governance, management and sustainability',
        "we_statement": 'We have clear responsibilities, roles, systems of accountability and good governance. We use these to manage and deliver good quality, sustainable care, treatment and support. We act on the best information about risk, performance and outcomes, and we share this securely with others when appropriate.',
        "evidence_categories": ['governance structure', 'accountability systems', 'risk management', 'performance data']
    },
    {
        "id": 'W6',
        "key_question": 'well_led',
        "title": 'Partnerships and communities',
        "we_statement": 'We understand our duty to collaborate and work in partnership, so our services work seamlessly for people. We share information and learn with partners and collaborate for improvement.',
        "evidence_categories": ['partnership agreements', 'collaborative working', 'information sharing', 'joint improvement']
    },
    {
        "id": 'W7',
        "key_question": 'well_led',
        "title": 'Learning, improvement and innovation',
        "we_statement": 'We focus on continuous learning, innovation and improvement across our organisation and the local system. We encourage creative ways of delivering equality of experience and outcomes.',
        "evidence_categories": ['learning culture', 'innovation projects', 'quality improvement', 'research participation']
    },
    {
        "id": 'W8',
        "key_question": 'well_led',
        "title": 'Environmental sustainability',
        "we_statement": 'We understand any negative impact that the way we deliver care, treatment and support may have on the environment. We work towards reducing any negative impact and promoting environmental sustainability.',
        "evidence_categories": ['sustainability plans', 'environmental audits', 'carbon reduction', 'green initiatives']
    }
]

# Comprehensive Interview Questions by Role and Key Question
INSPECTION_QUESTIONS = [
    # SAFE - Manager Questions
    {
        "id": 'Q-S-M1',
        "key_question": 'safe',
        "target_role": 'manager',
        "question": 'What do you understand your main responsibilities to be as a registered manager regarding safeguarding?',
        "follow_ups": [
            'Can you walk me through the last safeguarding concern that was raised?',
            'How did you ensure it was investigated and reported appropriately?',
            'What changes were made as a result?'
        ],
        "good_response_indicators": [
            'Clear understanding of safeguarding lead responsibilities',
            'Can describe notification procedures to CQC and local authority',
            'Evidence of learning and improvement from incidents',
            'Regular safeguarding training for all staff'
        ],
        "red_flags": [
            'Cannot describe the safeguarding reporting process',
            'No recent safeguarding training evidence',
            'Unable to recall how concerns were handled',
            'No mention of multi-agency working'
        ],
        "related_regulations": ['Regulation 13'],
        "quality_statement_id": 'S3'
    },
    {
        "id": 'Q-S-M2',
        "key_question": 'safe',
        "target_role": 'manager',
        "question": 'How do you ensure that staffing levels are safe and meet the needs of the people you support?',
        "follow_ups": [
            'How do you plan rotas to ensure adequate cover?',
            'What happens when staff call in sick?',
            'How do you monitor that staffing matches dependency levels?'
        ],
        "good_response_indicators": [
            'Uses dependency tools to calculate staffing',
            'Has contingency plans for staff shortages',
            'Regularly reviews staffing against needs',
            'Can evidence safe staffing levels during nights/weekends'
        ],
        "red_flags": [
            'No formal dependency assessment process',
            'Reliance on agency without proper vetting',
            'History of complaints about staffing',
            'No contingency planning'
        ],
        "related_regulations": ['Regulation 18'],
        "quality_statement_id": 'S6'
    },
    {
        "id": 'Q-S-M3',
        "key_question": 'safe',
        "target_role": 'manager',
        "question": 'Describe your infection prevention and control procedures. How have these evolved since the pandemic?',
        "follow_ups": [
            'How do you audit IPC compliance?',
            'What training do staff receive?',
            'How do you manage an outbreak situation?'
        ],
        "good_response_indicators": [
            'Regular IPC audits with documented outcomes',
            'Up-to-date IPC training for all staff',
            'Clear outbreak management protocols',
            'Appropriate PPE availability and usage'
        ],
        "red_flags": [
            'No IPC champion or lead',
            'Outdated training records',
            'No outbreak contingency plan',
            'Poor hand hygiene compliance'
        ],
        "related_regulations": ['Regulation 12'],
        "quality_statement_id": 'S7'
    },
    {
        "id": 'Q-S-M4',
        "key_question": 'safe',
        "target_role": 'manager',
        "question": 'How do you ensure medicines are managed safely in this service?',
        "follow_ups": [
            'What checks do you conduct on medication storage?',
            'How are medication errors addressed and learned from?',
            'How do you ensure competency of staff administering medicines?'
        ],
        "good_response_indicators": [
            'Regular medication audits',
            'Clear error reporting and learning process',
            'Competency assessments for medication administration',
            'Proper controlled drug procedures'
        ],
        "red_flags": [
            'No regular medication audits',
            'Gaps in MAR charts with no explanation',
            'Staff not competency assessed',
            'Temperature monitoring not documented'
        ],
        "related_regulations": ['Regulation 12'],
        "quality_statement_id": 'S8'
    },
    {
        "id": 'Q-S-M5',
        "key_question": 'safe',
        "target_role": 'manager',
        "question": 'How do you promote a learning culture when things go wrong?',
        "follow_ups": [
            'Can you give an example of an incident and what was learned?',
            'How are lessons shared with the team?',
            'What changes have been implemented as a result of incidents?'
        ],
        "good_response_indicators": [
            'No-blame approach to incident reporting',
            'Regular lessons learned sessions',
            'Evidence of changes from incident analysis',
            'Staff feel confident to report concerns'
        ],
        "red_flags": [
            'Punitive culture around errors',
            'No analysis of incidents',
            'Same types of incidents recurring',
            'Staff afraid to report issues'
        ],
        "related_regulations": ['Regulation 17', 'Regulation 20'],
        "quality_statement_id": 'S1'
    },

    # SAFE - Care Worker Questions
    {
        "id": 'Q-S-C1',
        "key_question": 'safe',
        "target_role": 'care_worker',
        "question": 'What would you do if you suspected a service user was being abused?',
        "follow_ups": [
            'Who would you report this to?',
            'What if the person asked you not to tell anyone?',
            'Have you had safeguarding training?'
        ],
        "good_response_indicators": [
            'Would report immediately to manager/safeguarding lead',
            'Understands duty to report overrides wishes in serious cases',
            'Has received recent safeguarding training',
            'Knows not to investigate themselves'
        ],
        "red_flags": [
            'Would try to handle it themselves',
            'Unsure who to report to',
            'No recent training',
            'Would keep it confidential if asked'
        ],
        "related_regulations": ['Regulation 13'],
        "quality_statement_id": 'S3'
    },
    {
        "id": 'Q-S-C2',
        "key_question": 'safe',
        "target_role": 'care_worker',
        "question": 'How do you prevent infection and cross-contamination in your work?',
        "follow_ups": [
            'When do you wash your hands or use gel?',
            'What PPE do you use and when?',
            'How do you handle soiled laundry?'
        ],
        "good_response_indicators": [
            'Describes WHO 5 moments for hand hygiene',
            'Correct PPE selection for different tasks',
            'Proper waste segregation knowledge',
            'Regular IPC training'
        ],
        "red_flags": [
            'Inconsistent hand hygiene',
            'Incorrect PPE usage',
            'Poor waste handling',
            'No training evidence'
        ],
        "related_regulations": ['Regulation 12'],
        "quality_statement_id": 'S7'
    },
    {
        "id": 'Q-S-C3',
        "key_question": 'safe',
        "target_role": 'care_worker',
        "question": 'How do you support service users with taking their medicines?',
        "follow_ups": [
            'What do you check before giving medication?',
            'What would you do if you made an error?',
            'What about PRN (as needed) medicines?'
        ],
        "good_response_indicators": [
            'Follows 6 rights of medication administration',
            'Would report errors immediately',
            'Understands PRN protocols and documentation',
            'Has medication competency assessment'
        ],
        "red_flags": [
            'Cannot describe checks required',
            'Would try to cover up errors',
            'Unclear on PRN procedures',
            'No competency assessment'
        ],
        "related_regulations": ['Regulation 12'],
        "quality_statement_id": 'S8'
    },

    # EFFECTIVE - Manager Questions
    {
        "id": 'Q-E-M1',
        "key_question": 'effective',
        "target_role": 'manager',
        "question": 'How do you ensure staff remain competent for their role?',
        "follow_ups": [
            'What training is mandatory and how often is it refreshed?',
            'How do you assess competency, not just attendance?',
            'How do you support staff who are struggling?'
        ],
        "good_response_indicators": [
            'Clear training matrix with refresh dates',
            'Competency observations and assessments',
            'Supervision and appraisal processes',
            'Support plans for underperforming staff'
        ],
        "red_flags": [
            'Only e-learning with no practical assessment',
            'Expired training certifications',
            'No supervision records',
            'No plan for struggling staff'
        ],
        "related_regulations": ['Regulation 18', 'Regulation 19'],
        "quality_statement_id": 'S6'
    },
    {
        "id": 'Q-E-M2',
        "key_question": 'effective',
        "target_role": 'manager',
        "question": 'How do you ensure care is delivered in line with current best practice and guidance?',
        "follow_ups": [
            'How do you stay updated on NICE guidelines?',
            'Can you give an example of implementing new guidance?',
            'How do you ensure staff follow updated procedures?'
        ],
        "good_response_indicators": [
            'Subscribes to NICE alerts',
            'Regular policy reviews',
            'Evidence of implementing new guidance',
            'Staff briefings on updates'
        ],
        "red_flags": [
            'Policies significantly out of date',
            'Unaware of recent guidance changes',
            'No system for disseminating updates',
            'Practice not aligned with current guidelines'
        ],
        "related_regulations": ['Regulation 12'],
        "quality_statement_id": 'E2'
    },
    {
        "id": 'Q-E-M3',
        "key_question": 'effective',
        "target_role": 'manager',
        "question": 'How do you ensure valid consent is obtained for care and treatment?',
        "follow_ups": [
            'What about people who lack mental capacity?',
            'Can you describe a recent Best Interest decision?',
            'How is consent documented?'
        ],
        "good_response_indicators": [
            'Clear consent policy and process',
            'Mental Capacity Act training',
            'Documented capacity assessments',
            'Best Interest decision records'
        ],
        "red_flags": [
            'Blanket consent forms',
            'No capacity assessments',
            'Decisions made without consultation',
            'Poor MCA knowledge'
        ],
        "related_regulations": ['Regulation 11'],
        "quality_statement_id": 'E6'
    },

    # EFFECTIVE - Care Worker Questions
    {
        "id": 'Q-E-C1',
        "key_question": 'effective',
        "target_role": 'care_worker',
        "question": 'What training have you received and how have you used this in practice?',
        "follow_ups": [
            'What mandatory training have you completed?',
            'Can you give an example of using training in a real situation?',
            'What training would you like to receive?'
        ],
        "good_response_indicators": [
            'Can list recent training completed',
            'Gives practical examples of application',
            'Engaged with learning and development',
            'Aware of training they need'
        ],
        "red_flags": [
            'Cannot recall training',
            'No practical application',
            'Expired essential training',
            'Disengaged with learning'
        ],
        "related_regulations": ['Regulation 18'],
        "quality_statement_id": 'S6'
    },
    {
        "id": 'Q-E-C2',
        "key_question": 'effective',
        "target_role": 'care_worker',
        "question": 'How do you ensure you gain consent before providing care?',
        "follow_ups": [
            'What if someone refuses care?',
            'How do you support someone who cannot verbally consent?',
            'What about people with dementia?'
        ],
        "good_response_indicators": [
            'Always explains and seeks agreement',
            'Respects refusals and reports appropriately',
            'Uses non-verbal cues for those who cannot speak',
            'Understands capacity fluctuates'
        ],
        "red_flags": [
            'Assumes consent',
            'Would override refusals',
            'No awareness of capacity issues',
            'Does not document consent'
        ],
        "related_regulations": ['Regulation 11'],
        "quality_statement_id": 'E6'
    },

    # CARING - All Roles
    {
        "id": 'Q-C-A1',
        "key_question": 'caring',
        "target_role": 'all',
        "question": 'How do you ensure service users are treated with kindness, respect, and compassion?',
        "follow_ups": [
            'Can you give a specific example?',
            'How do you protect someones dignity during personal care?',
            'What makes you proud of the care you provide?'
        ],
        "good_response_indicators": [
            'Genuine warmth and examples of going above and beyond',
            'Clear dignity-preserving practices',
            'Person-centred language',
            'Emotional intelligence evident'
        ],
        "red_flags": [
            'Task-focused responses',
            'Impersonal or clinical language',
            'Cannot give specific examples',
            'Dismissive of emotional needs'
        ],
        "related_regulations": ['Regulation 10'],
        "quality_statement_id": 'C1'
    },
    {
        "id": 'Q-C-A2',
        "key_question": 'caring',
        "target_role": 'all',
        "question": 'How do you involve service users in their care plans and decision-making?',
        "follow_ups": [
            'How do you find out what is important to someone?',
            'How do you support someone to express their views?',
            'What if a family member disagrees with the person?'
        ],
        "good_response_indicators": [
            'Describes person-centred planning approaches',
            'Advocates for the person\'s voice',
            'Involves families appropriately',
            'Uses creative communication methods'
        ],
        "red_flags": [
            'Care plans done to people not with them',
            'Family views override person\'s wishes',
            'No efforts to support communication',
            'Staff-convenient routines dominate'
        ],
        "related_regulations": ['Regulation 9'],
        "quality_statement_id": 'C2'
    },
    {
        "id": 'Q-C-M1',
        "key_question": 'caring',
        "target_role": 'manager',
        "question": 'How do you promote staff wellbeing and prevent burnout?',
        "follow_ups": [
            'What support is available for staff under stress?',
            'How do you monitor workloads?',
            'What recognition do staff receive?'
        ],
        "good_response_indicators": [
            'Staff wellbeing program in place',
            'Employee assistance available',
            'Reasonable workloads maintained',
            'Recognition and appreciation shown'
        ],
        "red_flags": [
            'Staff regularly working excessive hours',
            'No wellbeing support',
            'High staff turnover',
            'Staff complaints about stress'
        ],
        "related_regulations": ['Regulation 18'],
        "quality_statement_id": 'C5'
    },

    # RESPONSIVE - Manager Questions
    {
        "id": 'Q-R-M1',
        "key_question": 'responsive',
        "target_role": 'manager',
        "question": 'How does your service achieve formal and informal feedback from service users?',
        "follow_ups": [
            'How is this feedback analysed and acted upon?',
            'Can you give an example of a change made from feedback?',
            'How do you ensure all voices are heard, including those who cannot easily communicate?'
        ],
        "good_response_indicators": [
            'Multiple feedback mechanisms',
            'Regular analysis and action planning',
            'Evidence of changes from feedback',
            'Accessible formats for all'
        ],
        "red_flags": [
            'No formal feedback system',
            'Feedback not acted upon',
            'Only hear from those who can speak up',
            'No evidence of improvements from feedback'
        ],
        "related_regulations": ['Regulation 16'],
        "quality_statement_id": 'R4'
    },
    {
        "id": 'Q-R-M2',
        "key_question": 'responsive',
        "target_role": 'manager',
        "question": 'How do you respond to complaints and what do you learn from them?',
        "follow_ups": [
            'Can you walk me through the last complaint?',
            'How was the complainant informed of the outcome?',
            'What changes were made as a result?'
        ],
        "good_response_indicators": [
            'Clear complaints process',
            'Timely responses',
            'Evidence of learning from complaints',
            'Complainant satisfaction tracked'
        ],
        "red_flags": [
            'Defensive attitude to complaints',
            'Complaints not documented',
            'No changes result from complaints',
            'Poor communication with complainants'
        ],
        "related_regulations": ['Regulation 16'],
        "quality_statement_id": 'R4'
    },
    {
        "id": 'Q-R-M3',
        "key_question": 'responsive',
        "target_role": 'manager',
        "question": 'How do you make reasonable adjustments for people with disabilities?',
        "follow_ups": [
            'What about accessible information?',
            'How do you meet the needs of people with sensory impairments?',
            'What about people with learning disabilities or autism?'
        ],
        "good_response_indicators": [
            'Accessible Information Standard implemented',
            'Individual adjustments documented',
            'Staff trained in communication methods',
            'Physical environment assessed'
        ],
        "red_flags": [
            'No awareness of AIS',
            'One-size-fits-all approach',
            'Poor accessibility',
            'No staff training'
        ],
        "related_regulations": ['Regulation 9', 'Regulation 10'],
        "quality_statement_id": 'R5'
    },

    # RESPONSIVE - Care Worker Questions
    {
        "id": 'Q-R-C1',
        "key_question": 'responsive',
        "target_role": 'care_worker',
        "question": 'How do you ensure service users are satisfied with their care?',
        "follow_ups": [
            'How do you find out if something is wrong?',
            'What would you do if someone was unhappy?',
            'How do you adapt care to preferences?'
        ],
        "good_response_indicators": [
            'Regularly asks for feedback',
            'Responds to concerns promptly',
            'Adapts care to individual needs',
            'Reports concerns to management'
        ],
        "red_flags": [
            'Does not seek feedback',
            'Ignores or dismisses concerns',
            'Rigid in care approach',
            'Does not escalate issues'
        ],
        "related_regulations": ['Regulation 9'],
        "quality_statement_id": 'R1'
    },

    # WELL-LED - Manager Questions
    {
        "id": 'Q-W-M1',
        "key_question": 'well_led',
        "target_role": 'manager',
        "question": 'How do you lead and support your staff to maintain high standards of care?',
        "follow_ups": [
            'How visible are you to staff and residents?',
            'How do you communicate expectations?',
            'What is your approach when standards slip?'
        ],
        "good_response_indicators": [
            'Visible and accessible leadership',
            'Clear communication of expectations',
            'Supportive approach to improvement',
            'Role models values'
        ],
        "red_flags": [
            'Rarely visible to frontline',
            'Poor communication',
            'Punitive approach to errors',
            'Values not lived'
        ],
        "related_regulations": ['Regulation 17'],
        "quality_statement_id": 'W2'
    },
    {
        "id": 'Q-W-M2',
        "key_question": 'well_led',
        "target_role": 'manager',
        "question": 'What events must you notify the CQC about and how do you manage this?',
        "follow_ups": [
            'Can you give examples of notifiable events?',
            'How quickly must notifications be submitted?',
            'What is your process for ensuring this happens?'
        ],
        "good_response_indicators": [
            'Good knowledge of notifiable events',
            'System in place for timely notifications',
            'Log of all notifications made',
            'Understanding of statutory duties'
        ],
        "red_flags": [
            'Cannot name notifiable events',
            'No system for tracking',
            'Late or missed notifications',
            'Unaware of timeframes'
        ],
        "related_regulations": ['Regulation 18 (HSCA 2008)'],
        "quality_statement_id": 'W5'
    },
    {
        "id": 'Q-W-M3',
        "key_question": 'well_led',
        "target_role": 'manager',
        "question": 'How do you ensure staff feel able to speak up about concerns?',
        "follow_ups": [
            'What is your whistleblowing policy?',
            'Have staff ever raised concerns? What happened?',
            'How do you promote an open culture?'
        ],
        "good_response_indicators": [
            'Clear whistleblowing policy',
            'Staff confident to raise concerns',
            'Examples of concerns being acted on',
            'No victimisation of whistleblowers'
        ],
        "red_flags": [
            'No whistleblowing policy',
            'Staff afraid to speak up',
            'Concerns dismissed',
            'Evidence of victimisation'
        ],
        "related_regulations": ['Regulation 17', 'Regulation 20'],
        "quality_statement_id": 'W3'
    },
    {
        "id": 'Q-W-M4',
        "key_question": 'well_led',
        "target_role": 'manager',
        "question": 'How do you monitor quality and safety in your service?',
        "follow_ups": [
            'What audits do you conduct and how often?',
            'How do you use this information to improve?',
            'Who else is involved in governance?'
        ],
        "good_response_indicators": [
            'Comprehensive audit schedule',
            'Action plans from audits',
            'Evidence of improvements',
            'Multi-level governance'
        ],
        "red_flags": [
            'No regular audits',
            'Audits not acted on',
            'Quality not improving',
            'Manager working in isolation'
        ],
        "related_regulations": ['Regulation 17'],
        "quality_statement_id": 'W5'
    },

    # WELL-LED - Care Worker Questions
    {
        "id": 'Q-W-C1',
        "key_question": 'well_led',
        "target_role": 'care_worker',
        "question": 'Do you feel supported by the management team?',
        "follow_ups": [
            'How accessible are managers?',
            'Do you receive regular supervision?',
            'Do you feel listened to?'
        ],
        "good_response_indicators": [
            'Feels supported and valued',
            'Regular supervision occurs',
            'Managers accessible and approachable',
            'Feels voice is heard'
        ],
        "red_flags": [
            'Feels unsupported',
            'Rare or no supervision',
            'Managers distant',
            'Concerns ignored'
        ],
        "related_regulations": ['Regulation 18'],
        "quality_statement_id": 'W2'
    },
    {
        "id": 'Q-W-C2',
        "key_question": 'well_led',
        "target_role": 'care_worker',
        "question": 'Are you aware of the whistleblowing policy and would you feel confident using it?',
        "follow_ups": [
            'What would make you want to whistle-blow?',
            'Who would you report to if concerned about the manager?',
            'Have you ever had to raise a concern?'
        ],
        "good_response_indicators": [
            'Knows the policy exists and where to find it',
            'Confident they could use it',
            'Knows external reporting options',
            'No fear of reprisal'
        ],
        "red_flags": [
            'Unaware of policy',
            'Would not feel safe using it',
            'Does not know external options',
            'Fear of reprisal mentioned'
        ],
        "related_regulations": ['Regulation 17'],
        "quality_statement_id": 'W3'
    }
]

# Pre-defined Inspection Scenarios
INSPECTION_SCENARIOS = [
    {
        "id": 'FULL_MANAGER',
        "title": 'Registered Manager Interview',
        "description": 'A comprehensive interview covering all 5 Key Questions, focusing on leadership, governance, and overall service quality.',
        "difficulty": 'intensive',
        "duration": '45-60 minutes',
        "focus_areas": ['Safeguarding', 'Staffing', 'Governance', 'Quality Improvement', 'Complaints'],
        "target_role": 'manager',
        "key_questions": ['safe', 'effective', 'caring', 'responsive', 'well_led']
    },
    {
        "id": 'MANAGER_SAFE',
        "title": 'Manager: Safe Domain Focus',
        "description": 'Deep dive into safety aspects including safeguarding, medicines management, infection control, and staffing.',
        "difficulty": 'challenging',
        "duration": '20-30 minutes',
        "focus_areas": ['Safeguarding', 'Medicines', 'IPC', 'Staffing Levels', 'Risk Management'],
        "target_role": 'manager',
        "key_questions": ['safe']
    },
    {
        "id": 'CARE_WORKER_QUICK',
        "title": 'Care Worker Quick Check',
        "description": 'A rapid assessment of care worker knowledge on safeguarding, infection control, and dignity.',
        "difficulty": 'standard',
        "duration": '10-15 minutes',
        "focus_areas": ['Safeguarding Awareness', 'IPC Practice', 'Dignity in Care', 'Consent'],
        "target_role": 'care_worker',
        "key_questions": ['safe', 'caring']
    },
    {
        "id": 'CARE_WORKER_FULL',
        "title": 'Care Worker Comprehensive',
        "description": 'A thorough interview covering care practices, training, person-centred care, and awareness of policies.',
        "difficulty": 'challenging',
        "duration": '20-25 minutes',
        "focus_areas": ['Care Practice', 'Training', 'Person-Centred Care', 'Communication', 'Wellbeing'],
        "target_role": 'care_worker',
        "key_questions": ['safe', 'effective', 'caring', 'responsive']
    },
    {
        "id": 'SENIOR_CARER',
        "title": 'Senior Carer/Team Leader',
        "description": 'Interview for senior care staff covering delegation, supervision, medication administration, and care planning.',
        "difficulty": 'challenging',
        "duration": '25-35 minutes',
        "focus_areas": ['Leadership', 'Delegation', 'Medications', 'Care Planning', 'Staff Support'],
        "target_role": 'senior_carer',
        "key_questions": ['safe', 'effective', 'well_led']
    },
    {
        "id": 'SAFEGUARDING_FOCUS',
        "title": 'Safeguarding Deep Dive',
        "description": 'Intensive focus on safeguarding knowledge, policies, reporting procedures, and case handling for any role.',
        "difficulty": 'challenging',
        "duration": '15-20 minutes',
        "focus_areas": ['Safeguarding Policy', 'Reporting', 'Training', 'Case Handling', 'Multi-Agency'],
        "target_role": 'all',
        "key_questions": ['safe']
    },
    {
        "id": 'WELLLED_GOVERNANCE',
        "title": 'Governance & Well-Led',
        "description": 'Focus on leadership, governance, quality improvement, and regulatory compliance for managers.',
        "difficulty": 'intensive',
        "duration": '30-40 minutes',
        "focus_areas": ['Governance Structure', 'Quality Improvement', 'CQC Notifications', 'Audits', 'Staff Engagement'],
        "target_role": 'manager',
        "key_questions": ['well_led']
    },
    {
        "id": 'NEW_STARTER',
        "title": 'New Starter Induction Check',
        "description": 'Basic inspection readiness for newly onboarded care workers covering essential knowledge areas.',
        "difficulty": 'standard',
        "duration": '10-15 minutes',
        "focus_areas": ['Basic Safeguarding', 'Fire Safety', 'Moving & Handling', 'Infection Control', 'Consent'],
        "target_role": 'care_worker',
        "key_questions": ['safe', 'effective']
    }
]

KEY_QUESTIONS = {
    "safe": {
        "id": "safe",
        "title": "Safe",
        "color": "#ef4444",
        "description": "Are people protected from abuse and avoidable harm?",
        "icon": "🛡️",
    },
    "effective": {
        "id": "effective",
        "title": "Effective",
        "color": "#3b82f6",
        "description": "Does care achieve good outcomes and promote quality of life?",
        "icon": "🎯",
    },
    "caring": {
        "id": "caring",
        "title": "Caring",
        "color": "#ec4899",
        "description": (
            "Do staff treat people with compassion, kindness, dignity, and respect?"
        ),
        "icon": "💝",
    },
    "responsive": {
        "id": "responsive",
        "title": "Responsive",
        "color": "#f59e0b",
        "description": "Are services organised so they meet people's needs?",
        "icon": "⚡",
    },
    "well_led": {
        "id": "well_led",
        "title": "Well-Led",
        "color": "#8b5cf6",
        "description": (
            "Is the leadership, management, and governance assuring "
            "high-quality care?"
        ),
        "icon": "👔",
    },
}

SCORING_RUBRIC = {
    1: {
        "label": "Inadequate",
        "description": "Poor or unsafe practice; significant concerns",
    },
    2: {
        "label": "Requires Improvement",
        "description": "Some concerns; improvements needed",
    },
    3: {"label": "Good", "description": "Meets expected standards consistently"},
    4: {
        "label": "Outstanding",
        "description": "Exceptional practice; exceeds expectations",
    },
}


def get_scenario(scenario_id):
    return next((s for s in INSPECTION_SCENARIOS if s["id"] == scenario_id), None)


def questions_for_scenario(scenario_id):
    """Questions covering a scenario's key questions and target role.

    A question role of ``all`` matches every scenario, and a scenario role of
    ``all`` matches every question. Unknown scenarios yield no questions.
    """
    scenario = get_scenario(scenario_id)
    if scenario is None:
        return []

    role = scenario["target_role"]
    return [
        q
        for q in INSPECTION_QUESTIONS
        if q["key_question"] in scenario["key_questions"]
        and (role == "all" or q["target_role"] in (role, "all"))
    ]


def questions_by_role(role):
    return [q for q in INSPECTION_QUESTIONS if q["target_role"] in (role, "all")]


def questions_by_key_question(key_question):
    return [q for q in INSPECTION_QUESTIONS if q["key_question"] == key_question]
