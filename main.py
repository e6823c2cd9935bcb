#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
amarTasks - Консольный клиент
Регистрация, вход и работа со списком задач через REST API

Использование:
    python main.py signup
    python main.py list
    python main.py add "Write report" --due 2026-10-20T18:00 --importance 3 --urgency 4
    python main.py update <id> --status done
    python main.py delete <id>
    python main.py theme
    python main.py logout
"""

import argparse
import asyncio
import getpass
import logging
import sys

from pydantic import ValidationError as PydanticValidationError

from config import get_config
from core.store import StoreSnapshot
from models.enums import SignupStep, TaskStatus
from services import ServiceManager
from shared.exceptions import TaskAppError
from shared.models import TaskCreate
from utils.datetime_utils import calculate_remaining, get_local_datetime
from utils.logger import setup_logger
from utils.priority import priority_label

logger = logging.getLogger(__name__)

# ===== ВЫВОД =====

def print_tasks(snapshot: StoreSnapshot):
    if snapshot.error:
        print(f"⚠️  {snapshot.error}")
    if not snapshot.tasks:
        print("Задач нет")
        return

    for task in snapshot.tasks:
        remaining = calculate_remaining(task.rem_time)
        print(
            f"[{task.priority}] {task.title:<32} {remaining:<16} "
            f"{priority_label(task.priority):<10} {task.status:<12} {task.id}"
        )

def require_signed_in(manager: ServiceManager) -> bool:
    if not manager.store.signed_in:
        print("🔒 Сначала войдите: python main.py signup")
        return False
    return True

# ===== КОМАНДЫ =====

async def cmd_signup(manager: ServiceManager, args) -> int:
    signup = manager.signup

    while signup.step == SignupStep.SIGNUP:
        signup.update_field("username", input("Username: "))
        signup.update_field("email", input("Email: "))
        signup.update_field("password", getpass.getpass("Password: "))
        signup.update_field("confirm_password", getpass.getpass("Confirm password: "))
        await signup.submit_signup()
        for message in signup.errors.values():
            print(f"❌ {message}")

    while not signup.success:
        signup.set_otp(input("Verification code: "))
        if await signup.submit_otp():
            break
        for message in signup.errors.values():
            print(f"❌ {message}")
        if input("Resend code? [y/N] ").strip().lower() == "y":
            await signup.resend_otp()
            print(signup.errors.get("resend", ""))

    print("✅ Email подтвержден, выполняем вход...")
    await asyncio.sleep(manager.session.signin_delay + 0.1)
    return 0 if manager.store.signed_in else 1

async def cmd_list(manager: ServiceManager, args) -> int:
    if not require_signed_in(manager):
        return 1
    await manager.tasks.load_tasks()
    print_tasks(manager.store.snapshot())
    return 1 if manager.store.error else 0

async def cmd_add(manager: ServiceManager, args) -> int:
    if not require_signed_in(manager):
        return 1
    draft = TaskCreate.with_priority(
        title=args.title,
        rem_time=args.due,
        importance=args.importance,
        urgency=args.urgency,
        color=args.color
    )
    task = await manager.tasks.save_task(draft)
    print(f"📝 {task.title}: {calculate_remaining(task.rem_time)} ({task.id})")
    return 0

async def cmd_update(manager: ServiceManager, args) -> int:
    if not require_signed_in(manager):
        return 1
    updates = {
        name: value
        for name, value in (
            ("title", args.title),
            ("rem_time", args.due),
            ("importance", args.importance),
            ("urgency", args.urgency),
            ("status", args.status),
            ("color", args.color),
        )
        if value is not None
    }
    if not updates:
        print("Нечего обновлять")
        return 1
    await manager.tasks.update_task(args.task_id, updates)
    print(f"✏️ Задача {args.task_id} обновлена")
    return 0

async def cmd_delete(manager: ServiceManager, args) -> int:
    if not require_signed_in(manager):
        return 1
    await manager.tasks.delete_task(args.task_id)
    print(f"🗑️ Задача {args.task_id} удалена")
    return 0

async def cmd_theme(manager: ServiceManager, args) -> int:
    dark = manager.session.toggle_theme()
    print("🌑 Темная тема" if dark else "☀️ Светлая тема")
    return 0

async def cmd_logout(manager: ServiceManager, args) -> int:
    manager.session.sign_out()
    print("👋 Вы вышли")
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Консольный клиент amarTasks')
    parser.add_argument('--verbose', action='store_true', help='Подробные логи')
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('signup', help='Регистрация и подтверждение email').set_defaults(handler=cmd_signup)
    sub.add_parser('list', help='Список задач').set_defaults(handler=cmd_list)

    add = sub.add_parser('add', help='Новая задача')
    add.add_argument('title')
    add.add_argument('--due', default=get_local_datetime(), help='Дедлайн YYYY-MM-DDTHH:MM')
    add.add_argument('--importance', type=int, choices=range(1, 5), default=2)
    add.add_argument('--urgency', type=int, choices=range(1, 5), default=2)
    add.add_argument('--color')
    add.set_defaults(handler=cmd_add)

    update = sub.add_parser('update', help='Изменить задачу')
    update.add_argument('task_id')
    update.add_argument('--title')
    update.add_argument('--due')
    update.add_argument('--importance', type=int, choices=range(1, 5))
    update.add_argument('--urgency', type=int, choices=range(1, 5))
    update.add_argument('--status', choices=[status.value for status in TaskStatus])
    update.add_argument('--color')
    update.set_defaults(handler=cmd_update)

    delete = sub.add_parser('delete', help='Удалить задачу')
    delete.add_argument('task_id')
    delete.set_defaults(handler=cmd_delete)

    sub.add_parser('theme', help='Переключить тему').set_defaults(handler=cmd_theme)
    sub.add_parser('logout', help='Выйти').set_defaults(handler=cmd_logout)
    return parser

async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    config.ensure_directories()

    setup_logger(
        log_file=str(config.log_dir / "client.log"),
        level="DEBUG" if args.verbose else config.log_level.value
    )
    # В консоль только предупреждения, подробности в файле
    if not args.verbose:
        logging.getLogger().handlers[0].setLevel(logging.WARNING)

    async with ServiceManager(config) as manager:
        try:
            return await args.handler(manager, args)
        except TaskAppError as e:
            print(f"❌ {e.message}")
            return 1
        except PydanticValidationError as e:
            logger.debug(f"Некорректные поля: {e}")
            print(f"❌ {e.errors()[0]['msg']}")
            return 2

def run():
    """Точка входа консольной команды"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n👋 Прервано")
        sys.exit(130)

if __name__ == "__main__":
    run()
