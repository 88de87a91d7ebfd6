# oncoliving/core/baseline.py
"""
Out-of-the-box content: the baseline daily check-in quiz, its 4-tier scoring
table and the starter exercise catalog. Materialized once, when no quiz is
active / the catalog is empty.
"""

BASELINE_QUIZ = {
    "name": "Daily Wellness Check",
    "description": "Quick check to find out whether today is a good day to exercise and which activity fits",
}

# weight / scoreValue are kept as strings, exactly as they are stored
BASELINE_QUESTIONS = [
    {
        "text": "How is your energy level today? (0 = Very low, 10 = Very high)",
        "question_type": "SCALE_0_10",
        "weight": "1.5",
        "order": 1,
    },
    {
        "text": "How is your pain today? (0 = No pain, 10 = Severe pain)",
        "question_type": "SCALE_0_10",
        "weight": "2.0",
        "order": 2,
    },
    {
        "text": "Are you feeling nauseous today?",
        "question_type": "YES_NO",
        "weight": "1.0",
        "order": 3,
    },
    {
        "text": "How was your sleep last night?",
        "question_type": "MULTIPLE_CHOICE",
        "weight": "1.2",
        "order": 4,
        "options": [
            {"text": "Poor", "score_value": "2", "order": 1},
            {"text": "Fair", "score_value": "5", "order": 2},
            {"text": "Good", "score_value": "8", "order": 3},
            {"text": "Excellent", "score_value": "10", "order": 4},
        ],
    },
    {
        "text": "Have you urinated today?",
        "question_type": "YES_NO",
        "weight": "1.0",
        "order": 5,
    },
    {
        "text": "How much fluid have you had today?",
        "question_type": "MULTIPLE_CHOICE",
        "weight": "1.0",
        "order": 6,
        "options": [
            {"text": "Less than 500 ml", "score_value": "2", "order": 1},
            {"text": "Between 500 ml and 1 L", "score_value": "5", "order": 2},
            {"text": "Between 1 L and 2 L", "score_value": "8", "order": 3},
            {"text": "More than 2 L", "score_value": "10", "order": 4},
        ],
    },
    {
        "text": "How was your last meal?",
        "question_type": "MULTIPLE_CHOICE",
        "weight": "1.0",
        "order": 7,
        "options": [
            {"text": "I have not eaten yet", "score_value": "2", "order": 1},
            {"text": "Light snack", "score_value": "5", "order": 2},
            {"text": "Full meal", "score_value": "8", "order": 3},
            {"text": "I had nausea/vomiting", "score_value": "1", "order": 4},
        ],
    },
    {
        "text": "Are you feeling dizzy or short of breath?",
        "question_type": "YES_NO",
        "weight": "1.5",
        "order": 8,
    },
    {
        "text": "Have you had fever or chills in the last 24 hours?",
        "question_type": "YES_NO",
        "weight": "2.0",
        "order": 9,
    },
    {
        "text": "Have you noticed unusual bleeding or bruising?",
        "question_type": "YES_NO",
        "weight": "2.0",
        "order": 10,
    },
]

BASELINE_SCORING = [
    {
        "min_score": "0",
        "max_score": "20",
        "is_good_day": False,
        "recommended_exercise_type": "Rest Day",
        "exercise_description": "Today is not a good day for exercise. Focus on rest and recovery.",
    },
    {
        "min_score": "20",
        "max_score": "40",
        "is_good_day": True,
        "recommended_exercise_type": "Active Rest",
        "exercise_description": "Gentle movement such as a slow walk or stretching is recommended.",
    },
    {
        "min_score": "40",
        "max_score": "60",
        "is_good_day": True,
        "recommended_exercise_type": "Light Exercise",
        "exercise_description": "Light walking or gentle stretching for 15 to 20 minutes.",
    },
    {
        "min_score": "60",
        "max_score": "100",
        "is_good_day": True,
        "recommended_exercise_type": "Moderate Exercise",
        "exercise_description": "You can do moderate exercise such as a brisk walk or light strength training.",
    },
]

BASELINE_EXERCISES = [
    {
        "name": "Light walk",
        "description": "Comfortable walk for 10-20 minutes, within your limits.",
        "intensity_level": "LIGHT",
        "safety_guidelines": "Stay hydrated. Stop if you feel dizzy, short of breath or unusual pain.",
    },
    {
        "name": "Gentle stretching",
        "description": "Light stretches for mobility and stiffness (5-10 minutes).",
        "intensity_level": "LIGHT",
        "safety_guidelines": "Do not force. Hold each position for 20-30 seconds.",
    },
    {
        "name": "Light strength (seated)",
        "description": "Light band or bodyweight exercises with frequent breaks (8-12 min).",
        "intensity_level": "MODERATE",
        "safety_guidelines": "Prioritize technique. Stop if there is pain or strong shortness of breath.",
    },
    {
        "name": "Controlled moderate cardio",
        "description": "Marching in place or walking at a pace where talking stays comfortable (10-15 min).",
        "intensity_level": "MODERATE",
        "safety_guidelines": "Keep the effort light to moderate and stop on unusual symptoms.",
    },
    {
        "name": "Functional circuit",
        "description": "Short strength and mobility sequence (10-15 min), no impact.",
        "intensity_level": "STRONG",
        "safety_guidelines": "Avoid impact. Take breaks. Stop on pain, dizziness or shortness of breath.",
    },
]
