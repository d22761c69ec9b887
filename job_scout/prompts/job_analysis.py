"""
Job Analysis Prompts.

One prompt per company: search the company's current postings, screen them
against the user's criteria and answer with a single JSON object
``{"summary": ..., "jobs": [...]}``.

Literal braces in the JSON skeleton are doubled for ``str.format``.
"""


JOB_ANALYSIS_PROMPT_JA = """あなたは専門の採用コンサルタントです。
企業名「{company_name}」の現在の求人情報を調査してください。

企業の公式採用サイトや主要な求人メディアを検索し、以下の【ユーザー基準】に合致する求人を厳しくスクリーニングしてください。

【ユーザー基準】
"{criteria}"

※注意点:
- ユーザー基準に特定の条件（「大卒不問」「未経験可」「職種指定」など）がある場合は、それに合致する職種を幅広く探してください。
- 日本国内の募集を優先してください。

【出力形式】
- 結果は **必ず日本語で** 出力してください。
- **有効なJSONオブジェクトのみ** を返してください。
- 構造:
{{
  "summary": "ユーザー基準に対する企業の採用姿勢や状況の要約",
  "jobs": [
    {{
      "role": "職種名",
      "description": "仕事内容の概要",
      "requirements": ["応募要件1", "応募要件2"],
      "educationLevel": "高卒/高専卒/大卒/不問 など",
      "employmentType": "正社員/契約社員 など",
      "salary": "給与（判明した場合）",
      "location": "勤務地（判明した場合）",
      "matchScore": 85,
      "matchReason": "この求人がユーザー基準に合う理由",
      "url": "求人情報のURL（判明した場合）"
    }}
  ]
}}

matchScore は 0〜100 の整数です。
具体的な求人が見つからない場合は jobs を空の配列にし、summary でその理由や一般的な採用傾向（例:「現在は新卒研究職のみ募集しているようです」）を説明してください。"""


JOB_ANALYSIS_PROMPT_EN = """You are a professional recruitment consultant.
Research the current job openings at the company "{company_name}".

Search the company's official careers site and the major job boards, then strictly screen the openings against the USER CRITERIA below.

USER CRITERIA:
"{criteria}"

NOTES:
- If the criteria name specific conditions (no degree required, no experience required, a specific job family), search broadly for roles that satisfy them.
- Only include postings you actually found - never invent openings.

OUTPUT FORMAT:
- Write every value **in English**.
- Return **only a valid JSON object** with this shape:
{{
  "summary": "Summary of the company's hiring situation relative to the criteria",
  "jobs": [
    {{
      "role": "Job title",
      "description": "Overview of the work",
      "requirements": ["Requirement 1", "Requirement 2"],
      "educationLevel": "High school / Associate / Bachelor / Not required, etc.",
      "employmentType": "Full-time / Contract, etc.",
      "salary": "Salary if known",
      "location": "Location if known",
      "matchScore": 85,
      "matchReason": "Why this posting fits the criteria",
      "url": "Posting URL if known"
    }}
  ]
}}

matchScore is an integer from 0 to 100.
If no concrete postings are found, return an empty jobs array and explain why in summary (for example, "Only new-graduate research roles appear to be open")."""


JOB_ANALYSIS_PROMPTS = {
    "ja": JOB_ANALYSIS_PROMPT_JA,
    "en": JOB_ANALYSIS_PROMPT_EN,
}


def build_job_analysis_prompt(company_name: str, criteria: str, locale: str = "ja") -> str:
    """Render the per-company job analysis prompt."""
    template = JOB_ANALYSIS_PROMPTS.get(locale, JOB_ANALYSIS_PROMPT_JA)
    return template.format(company_name=company_name.strip(), criteria=criteria.strip())
