"""База данных, авторизация и доступ к задачам"""
