"""Generation settings: edit to customize prompts, quiz size and cache lifetimes."""

RETRY_MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 2.0

QUIZ_QUESTION_COUNT = 10
INSIGHT_TTL_DAYS = 7
FALLBACK_INSIGHT_TTL_DAYS = 1

COVER_LETTER_PROMPT = """\
Write a professional cover letter for a {job_title} position at {company_name}.

About the candidate:
- Industry: {industry}
- Years of Experience: {experience}
- Skills: {skills}
- Professional Background: {bio}

Job Description:
{job_description}

Requirements:
1. Use a professional, enthusiastic tone
2. Highlight relevant skills and experience
3. Show understanding of the company's needs
4. Keep it concise (max 400 words)
5. Use proper business letter formatting in markdown
6. Include specific examples of achievements
7. Relate candidate's background to job requirements

Format the letter in markdown.
"""

IMPROVE_PROMPT = """\
As an expert resume writer, improve the following {type} description for a {industry} professional.
Make it more impactful, quantifiable, and aligned with industry standards.
Current content: "{current}"

Requirements:
1. Use action verbs
2. Include metrics and results
3. Highlight technical skills
4. Keep it concise
5. Focus on achievements over responsibilities
6. Use industry-specific keywords

Format as a single paragraph without extra text.
"""

QUIZ_PROMPT = """\
Generate {count} technical interview questions for a {industry} professional{expertise}.

Each question should be multiple choice with 4 options.

Return the response in this JSON format only:
{{
  "questions": [
    {{
      "question": "string",
      "options": ["string", "string", "string", "string"],
      "correctAnswer": "string",
      "explanation": "string"
    }}
  ]
}}
"""

IMPROVEMENT_TIP_PROMPT = """\
The user got the following {industry} technical questions wrong:

{wrong_answers}

Provide a concise improvement tip under 2 sentences. Focus on knowledge gaps, not mistakes, and keep it encouraging.
"""

INSIGHTS_PROMPT = """\
Analyze the current state of the {industry} industry and provide insights in ONLY the following JSON format, without any additional notes:

{{
  "salaryRanges": [
    {{ "role": "string", "min": number, "max": number, "median": number, "location": "string" }}
  ],
  "growthRate": number,
  "demandLevel": "High" | "Medium" | "Low",
  "topSkills": ["skill1", "skill2"],
  "marketOutlook": "Positive" | "Neutral" | "Negative",
  "keyTrends": ["trend1", "trend2"],
  "recommendedSkills": ["skill1", "skill2"]
}}

Include at least 5 common roles for salary ranges, 5 skills and trends, and provide growth rate as a percentage.
Return ONLY the JSON, no extra text or markdown.
"""
