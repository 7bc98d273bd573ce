"""Translation table for the strings the generation core needs.

The full UI catalogue lives with the front end. This table holds the language
display names (used to tell the model which language to write in) and the
error messages the core returns to callers.
"""

DEFAULT_LOCALE = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "languageName": "English",
        "errorAddOneIngredient": "Please add at least one ingredient.",
        "errorSpecifyDiet": "Please specify your dietary needs or switch to Regular mode.",
        "errorOpenRouterKey": "An OpenRouter API key is required. Please add it in Settings.",
        "errorApiKey": "The API key is invalid or missing. Please check your settings.",
        "errorApi": "Sorry, we couldn't generate a recipe right now. Please try again.",
        "errorOpenRouterModelResponse": (
            "The model '{model}' returned a response that could not be read as a recipe. "
            "Please try again or choose a different model."
        ),
        "errorUnknown": "An unknown error occurred.",
    },
    "es": {
        "languageName": "Español",
        "errorAddOneIngredient": "Por favor, añade al menos un ingrediente.",
        "errorSpecifyDiet": "Especifica tus necesidades dietéticas o cambia al modo Normal.",
        "errorOpenRouterKey": "Se requiere una clave de API de OpenRouter. Añádela en Ajustes.",
        "errorApiKey": "La clave de API no es válida o falta. Revisa tu configuración.",
        "errorApi": "Lo sentimos, no pudimos generar una receta ahora. Inténtalo de nuevo.",
        "errorOpenRouterModelResponse": (
            "El modelo '{model}' devolvió una respuesta que no se pudo leer como receta. "
            "Inténtalo de nuevo o elige otro modelo."
        ),
        "errorUnknown": "Se produjo un error desconocido.",
    },
    "fr": {
        "languageName": "Français",
        "errorAddOneIngredient": "Veuillez ajouter au moins un ingrédient.",
        "errorSpecifyDiet": "Précisez vos besoins alimentaires ou passez en mode Normal.",
        "errorOpenRouterKey": "Une clé API OpenRouter est requise. Ajoutez-la dans les Paramètres.",
        "errorApiKey": "La clé API est invalide ou manquante. Vérifiez vos paramètres.",
        "errorApi": "Désolé, impossible de générer une recette pour le moment. Veuillez réessayer.",
        "errorOpenRouterModelResponse": (
            "Le modèle '{model}' a renvoyé une réponse illisible comme recette. "
            "Réessayez ou choisissez un autre modèle."
        ),
        "errorUnknown": "Une erreur inconnue s'est produite.",
    },
    "de": {
        "languageName": "Deutsch",
        "errorAddOneIngredient": "Bitte füge mindestens eine Zutat hinzu.",
        "errorSpecifyDiet": "Bitte gib deine Ernährungsbedürfnisse an oder wechsle in den normalen Modus.",
        "errorOpenRouterKey": "Ein OpenRouter-API-Schlüssel ist erforderlich. Bitte in den Einstellungen hinzufügen.",
        "errorApiKey": "Der API-Schlüssel ist ungültig oder fehlt. Bitte überprüfe deine Einstellungen.",
        "errorApi": "Leider konnte gerade kein Rezept erstellt werden. Bitte versuche es erneut.",
        "errorOpenRouterModelResponse": (
            "Das Modell '{model}' hat eine Antwort geliefert, die nicht als Rezept gelesen werden konnte. "
            "Bitte versuche es erneut oder wähle ein anderes Modell."
        ),
        "errorUnknown": "Ein unbekannter Fehler ist aufgetreten.",
    },
    "it": {
        "languageName": "Italiano",
        "errorAddOneIngredient": "Aggiungi almeno un ingrediente.",
        "errorSpecifyDiet": "Specifica le tue esigenze alimentari o passa alla modalità Normale.",
        "errorOpenRouterKey": "È richiesta una chiave API di OpenRouter. Aggiungila nelle Impostazioni.",
        "errorApiKey": "La chiave API non è valida o manca. Controlla le impostazioni.",
        "errorApi": "Spiacenti, non è stato possibile generare una ricetta. Riprova.",
        "errorOpenRouterModelResponse": (
            "Il modello '{model}' ha restituito una risposta non leggibile come ricetta. "
            "Riprova o scegli un altro modello."
        ),
        "errorUnknown": "Si è verificato un errore sconosciuto.",
    },
    "pt": {
        "languageName": "Português",
        "errorAddOneIngredient": "Adicione pelo menos um ingrediente.",
        "errorSpecifyDiet": "Especifique suas necessidades alimentares ou mude para o modo Normal.",
        "errorOpenRouterKey": "É necessária uma chave de API do OpenRouter. Adicione-a nas Configurações.",
        "errorApiKey": "A chave de API é inválida ou está ausente. Verifique suas configurações.",
        "errorApi": "Desculpe, não foi possível gerar uma receita agora. Tente novamente.",
        "errorOpenRouterModelResponse": (
            "O modelo '{model}' retornou uma resposta que não pôde ser lida como receita. "
            "Tente novamente ou escolha outro modelo."
        ),
        "errorUnknown": "Ocorreu um erro desconhecido.",
    },
    "ja": {
        "languageName": "日本語",
        "errorAddOneIngredient": "材料を少なくとも1つ追加してください。",
        "errorSpecifyDiet": "食事制限を入力するか、通常モードに切り替えてください。",
        "errorOpenRouterKey": "OpenRouterのAPIキーが必要です。設定で追加してください。",
        "errorApiKey": "APIキーが無効か、設定されていません。設定を確認してください。",
        "errorApi": "申し訳ありません。レシピを生成できませんでした。もう一度お試しください。",
        "errorOpenRouterModelResponse": (
            "モデル「{model}」の応答をレシピとして読み取れませんでした。"
            "もう一度試すか、別のモデルを選択してください。"
        ),
        "errorUnknown": "不明なエラーが発生しました。",
    },
}

SUPPORTED_LOCALES = tuple(TRANSLATIONS)


def get_language_name(locale: str) -> str:
    """Display name for a locale code, English when the locale is unknown."""
    return TRANSLATIONS.get(locale, {}).get("languageName") or TRANSLATIONS[DEFAULT_LOCALE]["languageName"]


def translate(locale: str, key: str, **kwargs) -> str:
    """Look up a message for a locale.

    Falls back to English, then to the key itself. Keyword arguments fill
    ``{placeholder}`` fields in the message.
    """
    text = TRANSLATIONS.get(locale, {}).get(key) or TRANSLATIONS[DEFAULT_LOCALE].get(key) or key
    if kwargs:
        text = text.format(**kwargs)
    return text
