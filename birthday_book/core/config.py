from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    project_name: str = "Birthday Book"

    database_url: str = "sqlite:///./birthday_book.db"

    session_secret_key: str = "change-me"
    admin_username: str = "admin"
    admin_password: str = "admin"

    per_page_options: list[int] = [10, 20, 50, 100]
    default_per_page_index: int = 1

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def default_limit(self) -> int:
        return self.per_page_options[self.default_per_page_index]


settings = Settings()
