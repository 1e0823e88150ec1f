"""
MCQ Generation Prompt Templates

Contains the prompts sent to the AI gateway when requesting a
difficulty-tagged question pool for an adaptive test.
"""


class MCQPrompts:
    """
    Prompt templates for MCQ pool generation.

    The adaptive sequencer needs every tier represented, so the pool
    prompt asks for an even spread of easy, medium and hard questions.
    """

    SYSTEM_CONTEXT = (
        "You are a technical interviewer creating MCQ questions. "
        "Always respond with valid JSON only, no markdown formatting or code blocks."
    )

    def generate_pool_prompt(self, topic: str, number_of_questions: int) -> str:
        """Build the user prompt for a question pool on a topic."""
        per_tier = max(1, -(-number_of_questions // 3))

        return f"""Generate exactly {number_of_questions} multiple choice questions about "{topic}".

Return ONLY a valid JSON array with this exact structure (no markdown, no code blocks, just the JSON):
[
  {{
    "question": "The question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 0,
    "explanation": "Brief explanation of why this is correct",
    "difficulty": "easy"
  }}
]

Requirements:
- Each question must have exactly 4 options
- correctAnswer is the zero-based index (0, 1, 2, or 3) of the correct option
- difficulty is one of "easy", "medium" or "hard"
- Include about {per_tier} questions of each difficulty
- Questions should be technical and interview-appropriate
- Cover different aspects of {topic}
- Explanations should be concise but informative

Generate exactly {number_of_questions} questions, no more, no less."""

    def messages(self, topic: str, number_of_questions: int) -> list[dict[str, str]]:
        """Chat messages for a pool request."""
        return [
            {"role": "system", "content": self.SYSTEM_CONTEXT},
            {"role": "user", "content": self.generate_pool_prompt(topic, number_of_questions)},
        ]
