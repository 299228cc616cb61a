"""Mirror run orchestration: fan-out, driver and error handling."""
