"""Screening questionnaire shown to applicants before they submit."""

SCREENING_QUESTIONS = [
    {
        "key": "yearsExperience",
        "label": "How many years of professional software development experience do you have?",
        "type": "number",
        "placeholder": "e.g. 5",
        "required": True,
    },
    {
        "key": "reactExperience",
        "label": "How many years of React/Next.js experience do you have?",
        "type": "number",
        "placeholder": "e.g. 3",
        "required": True,
    },
    {
        "key": "currentRole",
        "label": "What is your current role?",
        "type": "text",
        "placeholder": "e.g. Senior Frontend Developer",
        "required": True,
    },
    {
        "key": "systemDesign",
        "label": (
            "Describe a system you designed or architected. "
            "What were the key challenges and how did you address them?"
        ),
        "type": "textarea",
        "placeholder": "Provide details about your approach, trade-offs, and results...",
        "required": True,
        "rows": 4,
    },
    {
        "key": "availability",
        "label": "When are you available to start?",
        "type": "select",
        "required": True,
        "options": [
            {"value": "immediate", "label": "Immediately"},
            {"value": "2weeks", "label": "Within 2 weeks"},
            {"value": "1month", "label": "Within 1 month"},
            {"value": "2months", "label": "Within 2 months"},
            {"value": "3months", "label": "3+ months"},
        ],
    },
    {
        "key": "noticePeriod",
        "label": "What is your current notice period?",
        "type": "select",
        "required": True,
        "options": [
            {"value": "none", "label": "No notice period / Immediately"},
            {"value": "1week", "label": "1 week"},
            {"value": "2weeks", "label": "2 weeks"},
            {"value": "1month", "label": "1 month"},
            {"value": "2months", "label": "2 months"},
            {"value": "3months", "label": "3+ months"},
        ],
    },
    {
        "key": "preferredWork",
        "label": "What is your preferred work arrangement?",
        "type": "select",
        "required": True,
        "options": [
            {"value": "remote", "label": "Fully remote"},
            {"value": "hybrid", "label": "Hybrid"},
            {"value": "onsite", "label": "On-site"},
        ],
    },
    {
        "key": "salaryExpectation",
        "label": "What are your salary expectations (annual, USD)?",
        "type": "text",
        "placeholder": "e.g. $120,000 - $150,000",
        "required": False,
    },
]

QUESTION_KEYS = [q["key"] for q in SCREENING_QUESTIONS]


def missing_required_answers(answers):
    """Keys of required questions left blank. Only the apply form enforces these."""
    return [
        q["key"] for q in SCREENING_QUESTIONS
        if q["required"] and not str(answers.get(q["key"]) or "").strip()
    ]
