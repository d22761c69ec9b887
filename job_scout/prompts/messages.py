"""
Localized status summaries shown in place of a model-written summary.
"""

NO_DATA = "no_data"
PARSE_FAILED = "parse_failed"
ANALYSIS_COMPLETE = "analysis_complete"
COMPANY_ANALYSIS_ERROR = "company_analysis_error"
BATCH_ANALYSIS_ERROR = "batch_analysis_error"
SEARCH_FAILED = "search_failed"

MESSAGES = {
    "ja": {
        NO_DATA: "データが見つかりませんでした。",
        PARSE_FAILED: "分析結果の解析に失敗しました。",
        ANALYSIS_COMPLETE: "分析が完了しました。",
        COMPANY_ANALYSIS_ERROR: "企業の分析中にエラーが発生しました。",
        BATCH_ANALYSIS_ERROR: "分析中にエラーが発生しました。",
        SEARCH_FAILED: "企業の検索中にエラーが発生しました。APIキーを確認してください。",
    },
    "en": {
        NO_DATA: "No data was found.",
        PARSE_FAILED: "Failed to parse the analysis result.",
        ANALYSIS_COMPLETE: "Analysis complete.",
        COMPANY_ANALYSIS_ERROR: "An error occurred while analyzing the company.",
        BATCH_ANALYSIS_ERROR: "An error occurred during analysis.",
        SEARCH_FAILED: "An error occurred while searching for companies. Please check your API key.",
    },
}


def get_message(key: str, locale: str = "ja") -> str:
    """Look up a status message, falling back to Japanese."""
    catalog = MESSAGES.get(locale, MESSAGES["ja"])
    return catalog[key]
