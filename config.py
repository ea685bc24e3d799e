import os

LLM_CONFIG = {
    "provider": os.environ.get("KB_LLM_PROVIDER", "deepseek"),
    "api_key": os.environ.get("KB_LLM_API_KEY", ""),
    "base_url": os.environ.get("KB_LLM_BASE_URL", "https://api.deepseek.com/v1"),
    "model": os.environ.get("KB_LLM_MODEL", "deepseek-chat"),
    "temperature": 0.7,
    "max_tokens": 1000,
    "system_prompt": (
        "你是一个专业的车载电子设备技术支持专家，能够基于知识库内容和专业知识"
        "为用户提供准确的技术咨询和建议。"
    ),
}

PATHS = {
    "corpus": "data/knowledge_base.jsonl",
    "log_file": "logs/query_log.json",
    "selection_file": "output/pending_selection.json",
}
