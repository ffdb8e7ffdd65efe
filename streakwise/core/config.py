from pydantic_settings import BaseSettings, SettingsConfigDict

from streakwise.services.consistency import DEFAULT_POLICY, ScoringPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./streakwise.db"
    APP_ENV: str = "development"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Scoring policy. Product decisions, tunable per deployment.
    RECOVERY_DAYS_ALLOWED: int = DEFAULT_POLICY.recovery_days_allowed
    CONSISTENCY_LOOKBACK_DAYS: int = DEFAULT_POLICY.lookback_days
    SUCCESS_RATE_WEIGHT: float = DEFAULT_POLICY.success_rate_weight
    STREAK_WEIGHT: float = DEFAULT_POLICY.streak_weight
    STREAK_TARGET_DAYS: int = DEFAULT_POLICY.streak_target_days
    DIFFICULTY_WEIGHT_EASY: float = DEFAULT_POLICY.difficulty_weight("easy")
    DIFFICULTY_WEIGHT_MEDIUM: float = DEFAULT_POLICY.difficulty_weight("medium")
    DIFFICULTY_WEIGHT_HARD: float = DEFAULT_POLICY.difficulty_weight("hard")

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def scoring_policy(self) -> ScoringPolicy:
        return ScoringPolicy(
            recovery_days_allowed=self.RECOVERY_DAYS_ALLOWED,
            lookback_days=self.CONSISTENCY_LOOKBACK_DAYS,
            success_rate_weight=self.SUCCESS_RATE_WEIGHT,
            streak_weight=self.STREAK_WEIGHT,
            streak_target_days=self.STREAK_TARGET_DAYS,
            difficulty_weights={
                "easy": self.DIFFICULTY_WEIGHT_EASY,
                "medium": self.DIFFICULTY_WEIGHT_MEDIUM,
                "hard": self.DIFFICULTY_WEIGHT_HARD,
            },
        )


settings = Settings()


def get_scoring_policy() -> ScoringPolicy:
    return settings.scoring_policy()
