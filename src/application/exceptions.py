class ListingNotFoundError(Exception):
    def __init__(self, listing_id: str) -> None:
        self.listing_id = listing_id
        super().__init__(f"Listing {listing_id} not found.")
