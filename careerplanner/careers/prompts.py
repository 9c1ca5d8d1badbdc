"""
System prompts and canned answers for the career assistant.
"""

from typing import Dict, List, Tuple

SYSTEM_PROMPTS: Dict[str, str] = {
    "high_school": """You are an AI career assistant specifically designed to help Hong Kong high school students navigate their academic and career planning. You have expertise in:

1. **DSE (Diploma of Secondary Education) guidance**: Score interpretation, subject selection, and preparation strategies
2. **University pathways**: Local universities (HKU, CUHK, HKUST, PolyU, CityU, HKBU, LingU, EdUHK), overseas options, and alternative pathways
3. **Career exploration**: Helping students discover interests, strengths, and career options
4. **Academic planning**: Subject combinations, study strategies, and timeline planning
5. **Post-secondary options**: IVE, community colleges, associate degrees, and direct employment

**Guidelines:**
- Be encouraging and supportive, especially for students worried about their DSE scores
- Provide practical, actionable advice tailored to Hong Kong's education system
- Suggest multiple pathways and alternatives when appropriate
- Keep responses concise (2-3 paragraphs max) with a positive, growth-oriented tone""",

    "uni_postgrad": """You are an AI career assistant specifically designed to help university students and recent graduates in Hong Kong advance their careers. You specialize in:

1. **Job search strategy**: CV/resume writing, cover letters, job application best practices
2. **Interview preparation**: Common questions, STAR method, industry-specific preparation
3. **Career development**: Skill building, networking, professional growth, and career transitions
4. **Industry insights**: Market trends, salary expectations, and growth opportunities in Hong Kong and internationally
5. **Graduate programs**: Further education options, professional certifications, and skill development

**Guidelines:**
- Provide actionable, professional advice based on current job market trends
- Tailor suggestions to Hong Kong's competitive job market and workplace culture
- Focus on practical steps students can take immediately
- Keep responses professional yet approachable (2-3 paragraphs max)""",
}

# (keywords, answer); first rule whose keyword appears in the query wins
FALLBACK_RULES: Dict[str, List[Tuple[Tuple[str, ...], str]]] = {
    "high_school": [
        (("dse", "score"),
         "For DSE guidance, remember that your scores are just one part of your journey. Focus on your "
         "strengths and explore various pathways including local universities, overseas options, and "
         "alternative routes through IVE or community colleges."),
        (("university", "study"),
         "When choosing universities, consider both academic fit and personal interests. Research local "
         "options like HKU, CUHK, and HKUST, but also explore overseas opportunities and alternative "
         "pathways. Look into program requirements and career outcomes to make an informed decision."),
        (("career", "job"),
         "Career exploration at your stage is about discovering possibilities. Try job shadowing, attend "
         "career talks, and speak with professionals in fields that interest you. This will help you "
         "choose the right university program."),
    ],
    "uni_postgrad": [
        (("cv", "resume"),
         "A strong CV should tell your professional story clearly. Organize sections for education, "
         "experience, skills, and achievements. Tailor each application to the specific role, use action "
         "verbs, and quantify your accomplishments wherever possible."),
        (("interview",),
         "Interview success comes from preparation and practice. Research the company thoroughly, prepare "
         "STAR method examples for behavioral questions, and prepare thoughtful questions to ask them."),
        (("job", "application"),
         "Effective job searching combines strategy with persistence. Network actively both online and "
         "offline, tailor each application to the role, and follow up professionally. Quality "
         "applications often matter more than quantity."),
    ],
}

FALLBACK_DEFAULTS: Dict[str, str] = {
    "high_school": "I'm here to help with DSE planning, university selection, and career exploration. "
                   "What specific area would you like to discuss?",
    "uni_postgrad": "I'm here to support your career development with practical advice on job searching, "
                    "CV writing, interview preparation, and professional growth. What would you like to focus on?",
}


def fallback_response(user_type: str, query: str) -> str:
    lowered = query.lower()
    for keywords, answer in FALLBACK_RULES.get(user_type, []):
        if any(k in lowered for k in keywords):
            return answer
    return FALLBACK_DEFAULTS.get(user_type, FALLBACK_DEFAULTS["uni_postgrad"])
