import pandas as pd
from django.core.management.base import BaseCommand

from comments.services import close_mongo_service, get_critic_service


class Command(BaseCommand):
    help = "Print the users who comment the most."

    def handle(self, *args, **options):
        try:
            critics = get_critic_service().most_active_commenters()
        finally:
            close_mongo_service()

        if not critics:
            self.stdout.write("No comments in the collection.")
            return

        df = pd.DataFrame([c.to_dict() for c in critics])
        df.index = df.index + 1
        self.stdout.write(df.to_string())
