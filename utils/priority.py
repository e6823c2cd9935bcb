# utils/priority.py

# Квадранты матрицы Эйзенхауэра
PRIORITY_LABELS = {
    1: "Do first",
    2: "Schedule",
    3: "Delegate",
    4: "Eliminate",
}

def get_priority(importance: int, urgency: int) -> int:
    """Приоритет 1-4 по важности и срочности (порог > 2)"""
    if importance > 2:
        return 1 if urgency > 2 else 3
    return 2 if urgency > 2 else 4

def priority_label(priority: int) -> str:
    return PRIORITY_LABELS.get(priority, "Unknown")
