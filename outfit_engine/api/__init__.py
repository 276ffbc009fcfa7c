"""HTTP API over the outfit engine."""
