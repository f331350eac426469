#!/usr/bin/env python3
"""
TODO管理CLI

Usage:
    python -m src.todo.cli list [--format json|text]
    python -m src.todo.cli add --content "内容" [--format json|text]
    python -m src.todo.cli done --id ID
    python -m src.todo.cli undo --id ID
    python -m src.todo.cli move --id ID --to INDEX
    python -m src.todo.cli delete --id ID
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any, Dict, Optional

from src.daybook.exceptions import DaybookError

from .models import TodoItem
from .repository import TodoRepository
from .service import TodoService


def format_todo_text(todo: TodoItem) -> str:
    """Todoアイテムをテキスト形式で整形"""
    mark = "x" if todo.completed else " "
    return f"{todo.order:>3}. [{mark}] {todo.content} ({todo.id})"


def format_todo_json(todo: TodoItem) -> Dict[str, Any]:
    """Todoアイテムを辞書形式に変換"""
    return asdict(todo)


def emit(todo: TodoItem, output_format: str, label: str) -> None:
    if output_format == "json":
        print(json.dumps(format_todo_json(todo), ensure_ascii=False))
    else:
        print(f"{label}: {format_todo_text(todo)}")


def cmd_list(service: TodoService, output_format: str) -> int:
    """Todoリストを表示"""
    items = service.list()
    if output_format == "json":
        print(json.dumps([format_todo_json(item) for item in items], ensure_ascii=False))
    elif not items:
        print("TODOは登録されていません。")
    else:
        for item in items:
            print(format_todo_text(item))
    return 0


def cmd_add(service: TodoService, content: str, output_format: str) -> int:
    emit(service.create(content), output_format, "追加しました")
    return 0


def cmd_set_completed(
    service: TodoService, todo_id: str, completed: bool, output_format: str
) -> int:
    todo = service.update(todo_id, completed=completed)
    emit(todo, output_format, "完了しました" if completed else "未完了に戻しました")
    return 0


def cmd_move(service: TodoService, todo_id: str, index: int, output_format: str) -> int:
    emit(service.update(todo_id, order=index), output_format, "移動しました")
    return 0


def cmd_delete(service: TodoService, todo_id: str, output_format: str) -> int:
    service.delete(todo_id)
    if output_format == "json":
        print(json.dumps({"success": True, "id": todo_id}, ensure_ascii=False))
    else:
        print(f"削除しました: ID {todo_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TODO管理CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLiteデータベースファイルのパス（デフォルト: data/daybook.db）",
    )
    parser.add_argument(
        "--owner",
        default="placeholder",
        help="TODOの所有者ID（デフォルト: placeholder）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    def add_format(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--format",
            choices=["json", "text"],
            default="text",
            help="出力フォーマット（デフォルト: text）",
        )

    add_format(subparsers.add_parser("list", help="TODOリストを表示"))

    parser_add = subparsers.add_parser("add", help="新しいTODOを末尾に追加")
    parser_add.add_argument("--content", required=True, help="TODOの内容")
    add_format(parser_add)

    for name, help_text in (("done", "TODOを完了にする"), ("undo", "TODOを未完了に戻す")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--id", required=True, help="対象TODOのID")
        add_format(sub)

    parser_move = subparsers.add_parser("move", help="TODOを指定位置へ移動")
    parser_move.add_argument("--id", required=True, help="移動するTODOのID")
    parser_move.add_argument("--to", type=int, required=True, help="移動先のインデックス（0始まり）")
    add_format(parser_move)

    parser_delete = subparsers.add_parser("delete", help="TODOを削除")
    parser_delete.add_argument("--id", required=True, help="削除するTODOのID")
    add_format(parser_delete)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)

    repo = TodoRepository(db_path=args.db_path if args.db_path else None)
    service = TodoService(repo, owner_id=args.owner)

    try:
        if args.command == "list":
            return cmd_list(service, args.format)
        if args.command == "add":
            return cmd_add(service, args.content, args.format)
        if args.command == "done":
            return cmd_set_completed(service, args.id, True, args.format)
        if args.command == "undo":
            return cmd_set_completed(service, args.id, False, args.format)
        if args.command == "move":
            return cmd_move(service, args.id, args.to, args.format)
        if args.command == "delete":
            return cmd_delete(service, args.id, args.format)
    except DaybookError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
