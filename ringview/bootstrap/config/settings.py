from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from ringview.bootstrap.config.loader import get_configfile
from ringview.core.space.layout import RingLayout


class LayoutSettings(BaseModel):
    center_x: Annotated[
        float,
        Field(
            description="Horizontal coordinate of the ring's center.",
            default=1000
        )
    ]

    center_y: Annotated[
        float,
        Field(
            description="Vertical coordinate of the ring's center (grows downwards).",
            default=1000
        )
    ]

    radius: Annotated[
        float,
        Field(
            description="Radius of the ring; every member is placed on this circle.",
            default=800,
            gt=0
        )
    ]


class ChannelSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description="Host of the topology source pushing ring events.",
            default="127.0.0.1"
        )
    ]

    port: Annotated[
        int,
        Field(
            description="TCP port of the topology source.",
            default=9191,
            ge=0,
            le=65535
        )
    ]

    max_frame_size: Annotated[
        int,
        Field(
            description=(
                "Maximum size of a single event frame.\n"
                "A larger frame is treated as a broken channel."
            ),
            default=1 * 1024 * 1024,
            gt=0
        )
    ]


class RenderSettings(BaseModel):
    format: Annotated[
        Literal["text", "json", "yaml"],
        Field(
            description="How each new snapshot is printed.",
            default="text"
        )
    ]


class RingViewConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RINGVIEW_",
        env_nested_delimiter="__",
        extra="allow"
    )

    layout: Annotated[
        LayoutSettings,
        Field(
            description=(
                "Geometry of the ring diagram.\n"
                "Identifier 0 sits at the top of the circle and identifiers grow\n"
                "clockwise."
            ),
            default_factory=LayoutSettings
        )
    ]

    channel: Annotated[
        ChannelSettings,
        Field(
            description="Where ring topology events are read from.",
            default_factory=ChannelSettings
        )
    ]

    render: Annotated[
        RenderSettings,
        Field(
            description="Output format of the viewer.",
            default_factory=RenderSettings
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),
        )

    def get_layout(self) -> RingLayout:
        return RingLayout(
            center_x=self.layout.center_x,
            center_y=self.layout.center_y,
            radius=self.layout.radius,
        )
