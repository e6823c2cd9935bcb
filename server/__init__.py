"""
amarTasks - REST API задач (FastAPI)
"""
