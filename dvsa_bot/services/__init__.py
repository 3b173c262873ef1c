"""Services: browser automation and the DVSA session controller."""
