def build_tailor_prompt(resume_text: str, jd_text: str) -> str:
    return f"""
You are an expert resume writer. Please modify the following resume to better fit the job description using relevant keywords and experiences.

Resume:
{resume_text}

Job Description:
{jd_text}

Return the improved resume in professional formatting (bullet points, spacing, etc).
"""
