"""Prompts and JSON schemas for structured document analysis."""

ANALYSIS_SYSTEM_PROMPT = """You are a careful medical document analyst.
You read medical reports, lab results, prescriptions and scans and summarize them for patients.
You never invent findings, values or diagnoses that are not supported by the input.
You always answer with a single JSON object and nothing else."""

# Literal schema embedded in the text-analysis prompt
TEXT_ANALYSIS_SCHEMA = """{
  "summary": "string or null - plain-language overview of the document",
  "diagnosis": "string or null - diagnosis stated or strongly supported by the document",
  "key_findings": ["string - notable results, values or observations"],
  "causes": ["string - likely causes mentioned or implied"] or null,
  "recommendations": "string or null - follow-up or advice given in the document",
  "precautions": ["string"],
  "remedies": ["string"],
  "important_notes": "string or null",
  "treatment_plan": "string or null",
  "lifestyle_changes": ["string"],
  "urgent_concerns": "string or null - anything needing prompt medical attention"
}"""

# Literal schema embedded in the image-analysis prompt
IMAGE_ANALYSIS_SCHEMA = """{
  "summary": "string - what the image shows",
  "diagnosis": "string or null",
  "key_findings": ["string"],
  "precautions": ["string"] or null,
  "remedies": ["string"] or null,
  "urgent_concerns": "string or null",
  "anatomical_structures": ["string - structures visible in the image"]
}"""

_OUTPUT_RULES = """Rules:
- Use only information present in the input. If a field is unknown, use null for strings and an empty list for lists. Do not fabricate values.
- Output ONLY the JSON object. No prose before or after it, no markdown, no code fences."""

# Placeholders: {schema}, {rules}, {document_text}
TEXT_ANALYSIS_PROMPT = """Analyze the following medical document and return a JSON object with exactly this structure:

{schema}

{rules}

DOCUMENT:
{document_text}"""

# Placeholders: {schema}, {rules}
IMAGE_ANALYSIS_PROMPT = """Analyze the attached medical image (scan, photo or scanned report) and return a JSON object with exactly this structure:

{schema}

{rules}"""


def build_text_analysis_prompt(document_text: str) -> str:
    """Fill the text-analysis template."""
    return TEXT_ANALYSIS_PROMPT.format(
        schema=TEXT_ANALYSIS_SCHEMA,
        rules=_OUTPUT_RULES,
        document_text=document_text,
    )


def build_image_analysis_prompt() -> str:
    """Fill the image-analysis template."""
    return IMAGE_ANALYSIS_PROMPT.format(schema=IMAGE_ANALYSIS_SCHEMA, rules=_OUTPUT_RULES)
