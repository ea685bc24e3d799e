import argparse
import json
import os

import config
from assistant import CompletionService, KnowledgeAssistant, SelectionList
from assistant.completion import create_client
from keyword_extraction import LLMKeywordExtractor
from knowledge_retriever import InMemoryDocumentStore
from utils.logger_system import log_json, log_msg, set_log_level

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="车载知识库问答工具 (检索 -> 排序 -> 选择 -> 回答)")

    parser.add_argument("--api_key", type=str, default=config.LLM_CONFIG["api_key"], help="LLM API Key")
    parser.add_argument("--base_url", type=str, default=config.LLM_CONFIG["base_url"], help="LLM Base URL")
    parser.add_argument("--model", type=str, default=config.LLM_CONFIG["model"], help="LLM Model Name")
    parser.add_argument("--corpus", type=str, default=config.PATHS["corpus"], help="知识库 JSONL 文件路径")
    parser.add_argument("--query", type=str, default="", help="用户问题")
    parser.add_argument("--history", type=str, default="", help="对话历史 JSON 文件（role/content 列表）")
    parser.add_argument("--select", type=int, default=None, help="对上一轮选择列表回复的编号")
    parser.add_argument("--selection", type=str, default=config.PATHS["selection_file"], help="待选择列表 JSON 文件路径")
    parser.add_argument("--no-llm", action="store_true", help="关键词抽取只使用规则")
    parser.add_argument("--search-only", action="store_true", help="只输出检索排序结果，不调用补全服务")
    parser.add_argument("--verbose", action="store_true", help="输出逐条评分明细 (DEBUG 日志)")

    return parser.parse_args(argv)

def build_assistant(args):
    if not os.path.isfile(args.corpus):
        log_msg("ERROR", f"知识库文件不存在: {args.corpus}")

    store = InMemoryDocumentStore.from_jsonl(args.corpus)

    completion = None
    if args.api_key:
        completion = CompletionService(
            client=create_client(args.api_key, args.base_url),
            model=args.model,
        )
    else:
        log_msg("WARNING", "未提供 API Key，仅可使用 --search-only")

    keyword_llm = None
    if completion is not None and not args.no_llm:
        keyword_llm = LLMKeywordExtractor(completion)

    return KnowledgeAssistant(store, completion=completion, keyword_llm=keyword_llm)

def load_messages(args):
    messages = []
    if args.history:
        with open(args.history, "r", encoding="utf-8") as f:
            messages = json.load(f)
    if args.query:
        messages.append({"role": "user", "content": args.query})
    return messages

def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        set_log_level("DEBUG")
    assistant = build_assistant(args)

    if args.search_only:
        outcome = assistant.search(args.query)
        print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
        log_json({"mode": "search", **outcome.to_dict()}, config.PATHS["log_file"])
        return

    if args.select is not None:
        if not os.path.isfile(args.selection):
            log_msg("ERROR", f"待选择列表不存在: {args.selection}")
        with open(args.selection, "r", encoding="utf-8") as f:
            pending = SelectionList.from_dict(json.load(f))
        result = assistant.select(args.select, pending)
        query = pending.query
    else:
        messages = load_messages(args)
        if not messages:
            log_msg("ERROR", "请通过 --query 或 --history 提供问题")
        result = assistant.send_message(messages)
        query = args.query

    if result.success:
        print(result.message)
    else:
        print(result.error)

    if result.requires_selection and result.selection is not None:
        os.makedirs(os.path.dirname(args.selection) or ".", exist_ok=True)
        with open(args.selection, "w", encoding="utf-8") as f:
            json.dump(result.selection.to_dict(), f, ensure_ascii=False, indent=2)
        log_msg("INFO", f"待选择列表已保存: {args.selection}")

    log_json(
        {
            "mode": "select" if args.select is not None else "message",
            "query": query,
            "success": result.success,
            "requires_selection": result.requires_selection,
            "sources": [doc.title for doc in result.sources],
            "usage": result.usage.to_dict() if result.usage else None,
            "error": result.error,
        },
        config.PATHS["log_file"],
    )
    log_msg("INFO", "问答流程执行结束。")

if __name__ == "__main__":
    main()
