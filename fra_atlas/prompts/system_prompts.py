# Prompts sent to the AI gateway for claim document digitization.

# =============================================================================
# OCR AND TRANSLATION (single image per request)
# =============================================================================
OCR_SYSTEM_PROMPT = (
    "You are an OCR expert. Extract all text from the provided document image IN ENGLISH ONLY. "
    "If the document is in another language, translate it to English while extracting. "
    "Maintain the structure and formatting as much as possible. "
    "If you can identify specific fields like names, addresses, villages, districts, states, "
    "claim types, coordinates, or land areas, note them. "
    "Return the raw extracted text first, then if possible, provide structured data in JSON format "
    "with fields: claimantName, village, district, state, claimType, coordinates, area. "
    "ALL OUTPUT MUST BE IN ENGLISH."
)

OCR_USER_INSTRUCTION = (
    "Extract all text from this document image in English and identify any FRA (Forest Rights Act) "
    "related information. If the text is in another language, translate it to English."
)
