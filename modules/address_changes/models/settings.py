"""Address Changes Module Settings

Pydantic model for the module's runtime settings, built either directly (tests,
library use) or from the framework ConfigLoader for a named environment.
"""

from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from src.config.config_loader import ConfigLoader


class AddressChangesSettings(BaseModel):
    """Runtime settings for the address change pipeline."""
    
    input_dir: Path = Field(..., description="Directory holding addresses_/customers_ snapshots")
    output_dir: Path = Field(..., description="Directory receiving address_changes_ files")
    address_prefix: str = Field("addresses", min_length=1)
    customer_prefix: str = Field("customers", min_length=1)
    output_prefix: str = Field("address_changes", min_length=1)
    file_extension: str = Field(".csv", description="Extension shared by input and output files")
    read_buffer_size: int = Field(65536, ge=1024, description="Read buffer size in bytes")
    
    @field_validator('file_extension')
    @classmethod
    def validate_file_extension(cls, v: str) -> str:
        """Extensions must start with a dot."""
        if not v.startswith('.') or len(v) < 2:
            raise ValueError('File extension must start with "." (e.g. ".csv")')
        return v
    
    @classmethod
    def from_config(cls, config_loader: ConfigLoader, environment: str,
                    **overrides: Any) -> 'AddressChangesSettings':
        """Build settings from an environment configuration.
        
        Args:
            config_loader: Framework configuration loader
            environment: Environment name (development/production)
            **overrides: Values that win over the configuration (e.g. from CLI flags);
                None values are ignored
                
        Returns:
            Validated settings
        """
        env_config = config_loader.load_environment_config(environment)
        prefixes = config_loader.get_section(environment, "file_prefixes")
        processing = config_loader.get_section(environment, "processing")
        
        values: Dict[str, Any] = {
            "input_dir": env_config["input_dir"],
            "output_dir": env_config["output_dir"],
        }
        if "addresses" in prefixes:
            values["address_prefix"] = prefixes["addresses"]
        if "customers" in prefixes:
            values["customer_prefix"] = prefixes["customers"]
        if "output" in prefixes:
            values["output_prefix"] = prefixes["output"]
        if "file_extension" in processing:
            values["file_extension"] = processing["file_extension"]
        if "read_buffer_size" in processing:
            values["read_buffer_size"] = processing["read_buffer_size"]
        
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
