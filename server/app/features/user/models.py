from dataclasses import dataclass


@dataclass
class User:
    """Пользователь, хранящийся в памяти процесса."""

    id: int
    first_name: str
    last_name: str
    department: str
    email: str

    def __repr__(self):
        return f"<User {self.id} - {self.email}>"
