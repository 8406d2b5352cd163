"""cli - aws-inventory 명령줄 인터페이스 (Click)"""
