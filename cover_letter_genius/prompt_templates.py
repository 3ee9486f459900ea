from jinja2 import Template

EXTRACTION_PROMPT = Template(
    "You are an expert data extraction bot. Your task is to parse the following resume text "
    "and extract the user's contact information. Identify the full name, email address, "
    "phone number, and mailing address (City and State is sufficient). "
    'If a piece of information is not found, return an empty string "" for that field. '
    'Return ONLY a raw JSON object with the keys: "fullName", "email", "phone", and "address". '
    "Do not add any other text or markdown. "
    "Resume Text:\n---\n{{ resume_text }}\n---",
    autoescape=False,
    keep_trailing_newline=True,
)

LETTER_PROMPT = Template(
    "You are an expert career coach. Your task is to write the body of a professional cover letter. "
    "Instructions: "
    "1. Infer the Company Name and the Hiring Manager's Name from the Job Description and Company Info. "
    'If a specific name isn\'t available, use a generic title like "{{ fallback_manager }}". '
    "2. Write three compelling body paragraphs for the cover letter. "
    "3. Use the user's resume for their experience, and the job description for the requirements. "
    "4. Paragraph 1 (Introduction): State the position from the job description and express enthusiasm. "
    "5. Paragraph 2 (Body): Connect the user's experience to the job requirements. "
    '6. Paragraph 3 (Closing): Use the "Company Info" to show genuine interest in the company. '
    '7. Return ONLY a raw JSON object with keys: "companyName", "hiringManagerName", '
    '"paragraph1", "paragraph2", "paragraph3". '
    "User's Full Name: {{ full_name }} "
    "User's Resume:\n---\n{{ resume_text }}\n--- "
    "Job Description:\n---\n{{ job_description }}\n--- "
    "Company Info:\n---\n{{ company_info }}\n---",
    autoescape=False,
    keep_trailing_newline=True,
)
