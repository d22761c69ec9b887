"""
Company Search Prompts.

The model is grounded with Google Search and asked to answer with a bare
JSON array of companies. JSON mode is unavailable together with the search
tool, so the prompt spells the output shape out instead.

Usage:
    from job_scout.prompts.company_search import build_company_search_prompt

    prompt = build_company_search_prompt("核融合 スタートアップ", locale="ja")
"""

DEFAULT_MAX_COMPANIES = 10


COMPANY_SEARCH_PROMPT_JA = """あなたは優秀な市場リサーチャーです。
ユーザーが指定した以下の【検索条件】に合致する、または関連性の高い企業を調査してリストアップしてください。

【検索条件】
「{criteria}」

【検索方針】
- 日本国内の企業、または日本に拠点を持つ主要なグローバル企業を優先してください。
- 会社四季報、日経、企業のプレスリリース、業界ニュースなど信頼できる情報源を使用してください。
- 大手企業だけでなく、条件に合う有力なスタートアップや中小企業も対象に含めてください。

【出力形式】
- 結果は **必ず日本語で** 出力してください。
- **有効なJSON配列のみ** を返してください。Markdownや説明文は含めないでください。
- 各オブジェクトの構造:
  - "name": 企業名
  - "description": 検索条件に関連する事業内容や特徴の簡潔な説明
  - "relevance": この企業が検索条件に合致する理由
  - "websiteUrl": 公式ウェブサイトのURL

上位{max_companies}社程度をリストアップしてください。"""


COMPANY_SEARCH_PROMPT_EN = """You are an experienced market researcher.
Research and list companies that match, or are closely related to, the SEARCH CRITERIA below.

SEARCH CRITERIA:
"{criteria}"

RESEARCH GUIDELINES:
- Use reliable sources: official company sites, press releases, business news, industry reports.
- Include promising startups and mid-sized companies, not only large corporations.
- Only list companies you actually found through search - never invent companies.

OUTPUT FORMAT:
- Write every value **in English**.
- Return **only a valid JSON array**. No markdown and no explanatory text.
- Each object has this shape:
  - "name": company name
  - "description": short description of the business relevant to the criteria
  - "relevance": why this company matches the criteria
  - "websiteUrl": official website URL

List about {max_companies} companies."""


COMPANY_SEARCH_PROMPTS = {
    "ja": COMPANY_SEARCH_PROMPT_JA,
    "en": COMPANY_SEARCH_PROMPT_EN,
}


def build_company_search_prompt(
    criteria: str,
    locale: str = "ja",
    max_companies: int = DEFAULT_MAX_COMPANIES,
) -> str:
    """
    Render the company search prompt.

    Args:
        criteria: Free-text industry / company criteria from the user
        locale: Output language ("ja" or "en")
        max_companies: Approximate number of companies to request

    Returns:
        Prompt string
    """
    template = COMPANY_SEARCH_PROMPTS.get(locale, COMPANY_SEARCH_PROMPT_JA)
    return template.format(criteria=criteria.strip(), max_companies=max_companies)
